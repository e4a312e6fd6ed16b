from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Database
    DB_USER: str = Field("wishnest")
    DB_PASSWORD: str = Field("wishnest")
    DB_NAME: str = Field("wishnest")
    DB_HOST: str = Field("postgres")
    DB_PORT: int = Field(5432)
    DATABASE_URL: str | None = Field(None)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(8000)
    DEBUG: bool = Field(False)
    JWT_SECRET_KEY: str = Field("supersecret")
    JWT_ALGORITHM: str = Field("HS256")
    JWT_EXP_DAYS: int = Field(7)
    CORS_ORIGIN_REGEX: str = Field(r"http://(localhost|127\.0\.0\.1)(:\d+)?")

    # Prometheus metrics server (0 disables it)
    METRICS_PORT: int = Field(0)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


settings = Settings()
