"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

# Settings are cached on first import, so configure them before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.services.leaderboard_service import LeaderboardService, get_leaderboard_service

# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Redis client stand-in with an empty leaderboard."""
    redis_client = AsyncMock()
    redis_client.zscore = AsyncMock(return_value=None)
    redis_client.zrank = AsyncMock(return_value=0)
    redis_client.zrange = AsyncMock(return_value=[])
    redis_client.hgetall = AsyncMock(return_value={})
    return redis_client


@pytest.fixture
def leaderboard_service(mock_redis) -> LeaderboardService:
    """Leaderboard service wired to the mocked Redis client."""
    service = LeaderboardService()
    service._redis = mock_redis
    return service


@pytest_asyncio.fixture(scope="function")
async def client(test_session, leaderboard_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_leaderboard_service] = lambda: leaderboard_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sample_upload() -> dict:
    """Sample upload payload for testing."""
    return {
        "name": "Test Labyrinth",
        "difficulty": 2,
        "remarks": "A small spiral",
        "creator_name": "alice",
        "data": """##########
#S       #
# ###### #
# #    # #
# # ## # #
# # ## # #
# #    # #
# ###### #
#       E#
##########""",
    }
