import os
import tempfile
from collections.abc import AsyncGenerator
from datetime import timedelta
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Settings are read once at import, so the test environment must exist first
_db_dir = tempfile.mkdtemp(prefix="accounts-test-")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-development-only")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{Path(_db_dir) / 'app.db'}")
os.environ.setdefault("LOG_FORMAT", "console")

from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.config import settings  # noqa: E402
from app.core.security import TokenCodec, get_token_codec  # noqa: E402
from app.database import get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import metadata, users  # noqa: E402

# Test database URL - MUST be different from production
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(_db_dir) / 'test.db'}",
)

if not TEST_DATABASE_URL.startswith("sqlite") and settings.database_url == TEST_DATABASE_URL:
    raise RuntimeError("TEST_DATABASE_URL must not point at the application database")

if TEST_DATABASE_URL.startswith("postgresql://"):
    TEST_DATABASE_URL = TEST_DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

# Use NullPool to avoid event loop issues between tests
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session on freshly created tables."""
    async with test_engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def token_codec() -> TokenCodec:
    """The codec the application signs with."""
    return get_token_codec()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict:
    """Create a test user in the database."""
    user_data = {
        "username": "alice",
        "password": "secret",
        "email": "alice@example.com",
    }

    result = await db_session.execute(insert(users).values(**user_data).returning(users.c.id))
    user_id = result.scalar_one()
    await db_session.commit()

    return {"id": user_id, **user_data}


@pytest.fixture
def auth_headers(test_user: dict, token_codec: TokenCodec) -> dict:
    """Create authentication headers for testing protected endpoints."""
    issued = token_codec.issue(test_user["username"], timedelta(minutes=30))
    return {"Authorization": f"Bearer {issued.token}"}
