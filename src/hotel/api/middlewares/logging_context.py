"""Per-request log context and access log."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.hotel.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

QUIET_PATHS = frozenset({"/health", "/metrics"})


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind the correlation id, log the outcome, then clear the context."""
    clear_request_context()
    bind_request_context(correlation_id.get())
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        if request.url.path not in QUIET_PATHS:
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        clear_request_context()
