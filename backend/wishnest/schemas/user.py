from typing import Optional
from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: str
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email_or_username: str
    password: str


class PublicUser(BaseModel):
    id: str
    name: str
    username: str
    avatar_url: Optional[str] = None


class UserResponse(PublicUser):
    email: str
    created_at: Optional[str] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


class PublicUserResponse(BaseModel):
    user: PublicUser
