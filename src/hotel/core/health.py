"""Health and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.hotel.core.config import get_settings
from src.hotel.core.db import get_session
from src.hotel.core.logging import get_logger
from src.hotel.core.redis import get_redis
from src.hotel.core.shutdown import request_tracker

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds


class HealthCache:
    """Caches the last dependency check so load balancer probes stay cheap."""

    def __init__(self, ttl: float = HEALTH_CACHE_TTL) -> None:
        self.ttl = ttl
        self._result: dict[str, Any] | None = None
        self._checked_at: float = 0

    def get(self, now: float) -> dict[str, Any] | None:
        if self._result is None or (now - self._checked_at) >= self.ttl:
            return None
        cached = self._result.copy()
        cached["cached"] = True
        cached["cache_age_seconds"] = round(now - self._checked_at, 1)
        return cached

    def store(self, result: dict[str, Any], now: float) -> None:
        self._result = result
        self._checked_at = now

    def reset(self) -> None:
        self._result = None
        self._checked_at = 0


health_cache = HealthCache()


async def check_dependencies(now: float) -> dict[str, Any]:
    """Check the database and Redis. Redis is optional, so its failure only degrades."""
    result: dict[str, Any] = {
        "status": "healthy",
        "database": "unknown",
        "redis": "not_configured",
        "cached": False,
        "timestamp": now,
    }

    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
        result["database"] = "healthy"
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        result["database"] = f"unhealthy: {e!s}"
        result["status"] = "unhealthy"

    redis = await get_redis()
    if redis:
        try:
            await redis.ping()
            result["redis"] = "healthy"
        except Exception as e:
            logger.warning("Redis health check failed", error=str(e))
            result["redis"] = f"unhealthy: {e!s}"
            if result["status"] == "healthy":
                result["status"] = "degraded"

    return result


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", include_in_schema=False)
    async def health(request: Request) -> JSONResponse:
        now = time.time()

        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                    "message": "Server is shutting down",
                },
                status_code=503,
            )

        result = health_cache.get(now)
        if result is None:
            result = await check_dependencies(now)
            health_cache.store(result, now)

        notifier = getattr(request.app.state, "notifier", None)
        if notifier is not None:
            result["realtime_subscriptions"] = notifier.subscriber_count()

        status_code = 200 if result["status"] == "healthy" else 503
        return JSONResponse(content=result, status_code=status_code)


def setup_metrics(app: FastAPI) -> None:
    """Expose Prometheus metrics, behind an API key when one is configured."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
        return

    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        expected = settings.metrics_api_key
        if api_key is None or expected is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(
        app,
        endpoint="/metrics",
        include_in_schema=False,
        dependencies=[Depends(verify_metrics_key)],
    )
