"""Transaction helpers shared by the services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.hotel.core.exceptions import DependencyError
from src.hotel.core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def storage_errors(session: AsyncSession, operation: str) -> AsyncGenerator[None]:
    """Roll back on any failure; surface storage failures as DependencyError.

    Domain errors raised inside the block propagate unchanged.
    """
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Storage operation failed", operation=operation, error=str(e))
        raise DependencyError("Storage is unavailable", operation=operation) from e
    except Exception:
        await session.rollback()
        raise


def as_row(entity: SQLModel) -> dict[str, Any]:
    """JSON-safe snapshot of a persisted row for change events."""
    return entity.model_dump(mode="json")


def revoked_sessions_row(user_id: UUID, token_hash: str | None = None) -> dict[str, Any]:
    """Change row for revoked sessions. Without ``token_hash`` it covers all of the user's.

    Only server-side listeners follow this table; it is never sent to clients.
    """
    return {"user_id": str(user_id), "token_hash": token_hash, "revoked": True}
