from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.hotel.api.middlewares import logging_context_middleware, request_tracking_middleware
from src.hotel.api.v1.router import api_router
from src.hotel.core.config import get_settings
from src.hotel.core.db import dispose_engine, get_session, run_migrations_async
from src.hotel.core.exceptions import setup_exception_handlers
from src.hotel.core.health import setup_health_endpoint, setup_metrics
from src.hotel.core.logging import get_logger, setup_logging
from src.hotel.core.rate_limit import limiter
from src.hotel.core.realtime import ChangeNotifier
from src.hotel.core.redis import close_redis
from src.hotel.core.security import SecurityHeadersMiddleware
from src.hotel.core.shutdown import request_tracker
from src.hotel.repositories import UserRepository, UserSessionRepository
from src.hotel.services import AuthService

logger = get_logger(__name__)


async def seed_admin(notifier: ChangeNotifier) -> None:
    """Create the configured admin account if it does not exist yet."""
    settings = get_settings()
    if not settings.seed_admin_username or not settings.seed_admin_password:
        return
    async with get_session() as session:
        service = AuthService(
            UserRepository(session), UserSessionRepository(session), session, notifier
        )
        await service.ensure_admin(
            settings.seed_admin_username,
            settings.seed_admin_password,
            settings.seed_admin_display_name,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    if settings.auto_migrate:
        await run_migrations_async()
    await seed_admin(app.state.notifier)

    yield

    grace_period = settings.shutdown_grace_period
    logger.info("Shutdown initiated", in_flight=request_tracker.in_flight_count)
    await request_tracker.start_shutdown()
    if not await request_tracker.wait_for_drain(timeout=grace_period):
        logger.warning(
            "Shutdown timeout, requests may not have completed",
            grace_period=grace_period,
            in_flight=request_tracker.in_flight_count,
        )

    logger.info("Closing connections")
    app.state.notifier.close()
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Login, session restore, logout and sign-up"},
    {"name": "users", "description": "The caller's profile, rooms and requests"},
    {"name": "rooms", "description": "Room registry"},
    {"name": "visits", "description": "Visit requests and host approval"},
    {"name": "messages", "description": "Hall and room chat"},
    {"name": "hall", "description": "Hall presence"},
    {"name": "inbox", "description": "Anonymous messages to the administrators"},
    {"name": "admin", "description": "Admin panel"},
    {"name": "realtime", "description": "WebSocket change feed"},
]


def create_app() -> FastAPI:
    settings = get_settings()
    is_production = settings.app_env == "production"
    openapi_enabled = settings.enable_openapi and not is_production

    app = FastAPI(
        title=settings.app_name,
        description="Hall, rooms and visit requests for the hotel chat",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if openapi_enabled else None,
    )

    # One notifier per application; services receive it through dependencies
    app.state.notifier = ChangeNotifier()

    setup_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(
        RateLimitExceeded, _rate_limit_exceeded_handler  # type: ignore[arg-type]
    )

    # Middleware added last runs first: correlation id is outermost
    app.middleware("http")(request_tracking_middleware)
    app.middleware("http")(logging_context_middleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=settings.csp_production if is_production else None,
        hsts=is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)
    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
