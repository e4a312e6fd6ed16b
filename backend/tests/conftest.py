import os
import sys
import asyncio
import pytest
from pathlib import Path

# Add project root (2 levels up from tests/) to sys.path so tests can import 'wishnest'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

# Keep the app's own engine off Postgres while modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wishnest.models.database import Base as DBBase
import wishnest.models.database as database_module


# Replace the app's database engine at import-time so that sessions opened
# through `wishnest.models.database` use the in-memory engine.
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    echo=False,
    future=True,
    poolclass=StaticPool,
)
test_async_session = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


async def _init_test_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(DBBase.metadata.create_all)

asyncio.run(_init_test_db())

# Bind into the app's database module
database_module.engine = test_engine
database_module.AsyncSessionLocal = test_async_session


@pytest.fixture
async def async_db():
    """Reset the in-memory schema and point FastAPI's get_db at it."""
    await database_module.reset_db()
    await database_module.init_db()

    async def _get_test_db():
        async with test_async_session() as session:
            yield session

    from wishnest.main import app as _app
    _app.dependency_overrides[database_module.get_db] = _get_test_db
    yield
    _app.dependency_overrides.clear()


@pytest.fixture
def client(async_db):
    from wishnest.main import app as _app
    return TestClient(_app)


@pytest.fixture
async def db_session(async_db):
    """A session on the test engine for service-level tests."""
    async with test_async_session() as session:
        yield session


@pytest.fixture
def session_factory(async_db):
    """Factory for extra independent sessions on the test engine."""
    return test_async_session
