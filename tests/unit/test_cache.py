"""Tests for the session blacklist (src/hotel/core/cache.py)."""

import pytest
from redis.asyncio import Redis

from src.hotel.core.cache import (
    PREFIX_SESSION_BLACKLIST,
    blacklist_session,
    is_session_blacklisted,
)

pytestmark = pytest.mark.unit


class TestBlacklistSession:
    async def test_blacklist_session_success(self, mock_redis: Redis) -> None:
        result = await blacklist_session("abc123hash", 3600)

        assert result is True
        assert await mock_redis.get(f"{PREFIX_SESSION_BLACKLIST}:abc123hash") == "1"

    async def test_blacklist_session_respects_ttl(self, mock_redis: Redis) -> None:
        await blacklist_session("ttl_hash", 7200)

        actual_ttl = await mock_redis.ttl(f"{PREFIX_SESSION_BLACKLIST}:ttl_hash")
        assert 0 < actual_ttl <= 7200

    async def test_expired_session_is_not_stored(self, mock_redis: Redis) -> None:
        assert await blacklist_session("expired_hash", 0) is False
        assert await mock_redis.exists(f"{PREFIX_SESSION_BLACKLIST}:expired_hash") == 0

    async def test_returns_false_when_redis_unavailable(
        self, mock_redis_unavailable: None
    ) -> None:
        assert await blacklist_session("some_hash", 3600) is False


class TestIsSessionBlacklisted:
    async def test_blacklisted_session(self, mock_redis: Redis) -> None:
        await blacklist_session("revoked", 3600)
        assert await is_session_blacklisted("revoked") is True

    async def test_unknown_session(self, mock_redis: Redis) -> None:
        assert await is_session_blacklisted("never_seen") is False

    async def test_returns_none_when_redis_unavailable(self, mock_redis_unavailable: None) -> None:
        """None tells the caller to fall back to the database."""
        assert await is_session_blacklisted("any") is None

    async def test_key_prefix_isolation(self, mock_redis: Redis) -> None:
        await mock_redis.set("other_prefix:isolated", "value")

        assert await is_session_blacklisted("isolated") is False
        await blacklist_session("isolated", 3600)
        assert await is_session_blacklisted("isolated") is True
        assert await mock_redis.get("other_prefix:isolated") == "value"
