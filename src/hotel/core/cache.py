"""Session blacklist backed by Redis.

The user_sessions table is the source of truth for revocation; the
blacklist only lets session checks skip the database for logged-out tokens.
"""

from src.hotel.core.redis import get_redis

PREFIX_SESSION_BLACKLIST = "session_blacklist"


async def blacklist_session(token_hash: str, ttl: int) -> bool:
    """Add a session token hash to the blacklist.

    Args:
        token_hash: SHA256 hash of the session token
        ttl: Time-to-live in seconds (remaining lifetime of the token)

    Returns:
        True if stored in Redis, False if Redis is unavailable or ttl expired
    """
    if ttl <= 0:
        return False
    redis = await get_redis()
    if not redis:
        return False
    await redis.setex(f"{PREFIX_SESSION_BLACKLIST}:{token_hash}", ttl, "1")
    return True


async def is_session_blacklisted(token_hash: str) -> bool | None:
    """Check if a session token hash is blacklisted.

    Returns:
        True: blacklisted (logged out)
        False: not blacklisted according to Redis
        None: Redis unavailable, caller must check the database
    """
    redis = await get_redis()
    if not redis:
        return None
    result = await redis.get(f"{PREFIX_SESSION_BLACKLIST}:{token_hash}")
    return result is not None
