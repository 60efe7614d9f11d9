"""Pytest configuration for all tests."""

import os

# Settings are cached on first use, so the test environment must be in place
# before anything from shopfront is imported.
os.environ.setdefault("SHOPFRONT_ENVIRONMENT", "testing")
os.environ.setdefault("SHOPFRONT_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SHOPFRONT_TOKEN_SECRET", "test-secret-key-with-at-least-32-bytes-of-entropy")
# Cheap Argon2 parameters keep API tests fast; hasher unit tests pass their own.
os.environ.setdefault("SHOPFRONT_PASSWORD_MEMORY_COST", "1024")
os.environ.setdefault("SHOPFRONT_PASSWORD_TIME_COST", "1")

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from shopfront.infrastructure.auth import FixedClock, TokenService  # noqa: E402
from shopfront.infrastructure.persistence.database import Base  # noqa: E402
from shopfront.infrastructure.persistence.models import UserModel  # noqa: E402, F401

TEST_TOKEN_SECRET = "test-secret-key-with-at-least-32-bytes-of-entropy"
T0 = 1_700_000_000


@pytest.fixture
def clock() -> FixedClock:
    """A clock pinned to a known instant."""
    return FixedClock(T0)


@pytest.fixture
def token_service(clock: FixedClock) -> TokenService:
    return TokenService(secret_key=TEST_TOKEN_SECRET, clock=clock)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def app(token_service: TokenService):
    """A fresh application with an empty catalog and cart store."""
    from shopfront.infrastructure.api.app import create_app

    application = create_app()
    application.state.token_service = token_service
    return application


@pytest_asyncio.fixture
async def client(app, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from shopfront.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register a user and return an Authorization header for them."""
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "shopper",
            "email": "shopper@example.com",
            "password": "CorrectHorse9!",
        },
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
