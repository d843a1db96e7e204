"""Endpoint rate limiting with slowapi.

Uses Redis storage when REDIS_URL is configured so limits hold across
workers; otherwise counts in memory per process. Disabled under APP_ENV=testing.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.hotel.core.config import get_settings
from src.hotel.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Rate limit by client IP only.

    Never include user-controlled headers in the key: rotating them would
    mint a fresh bucket per request.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create rate limiter with the appropriate storage backend."""
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; changing limits requires a restart.
limiter = create_limiter()
