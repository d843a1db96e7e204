"""structlog setup and log-context helpers."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Loggers that would otherwise repeat what the access middleware already reports
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access", "websockets")


def setup_logging(debug: bool = False, level: str = "INFO") -> None:
    """Configure structlog on top of the stdlib root logger.

    Debug mode renders colored console lines at DEBUG level; otherwise one
    JSON object per line at ``level``.
    """
    log_level = logging.DEBUG if debug else logging.getLevelNamesMapping().get(
        level.upper(), logging.INFO
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_user_context(user_id: UUID, role: str, username: str | None = None) -> None:
    """Attach the authenticated user to every later log line of the request.

    The username is personal data, so it is bound only when LOG_USERNAMES is on.
    """
    from src.hotel.core.config import get_settings

    bind_contextvars(user_id=str(user_id), role=role)
    if username and get_settings().log_usernames:
        bind_contextvars(username=username)


def clear_request_context() -> None:
    clear_contextvars()
