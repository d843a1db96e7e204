"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
# Cheap Argon2 parameters keep password hashing fast in tests
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("SEED_ADMIN_USERNAME", "")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.hotel.core import redis as redis_core
from src.hotel.core.config import get_settings
from src.hotel.core.realtime import ChangeNotifier

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# Modules that import get_redis by name
REDIS_CONSUMERS = (
    "src.hotel.core.redis.get_redis",
    "src.hotel.core.cache.get_redis",
    "src.hotel.core.health.get_redis",
)


@pytest.fixture
def notifier() -> ChangeNotifier:
    """A fresh notifier per test."""
    return ChangeNotifier()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """In-memory Redis that behaves like a real server."""
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client everywhere it is imported."""
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    for target in REDIS_CONSUMERS:
        monkeypatch.setattr(target, _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    for target in REDIS_CONSUMERS:
        monkeypatch.setattr(target, _get_none)
    yield
    redis_core.reset_redis_state()
