"""Repository for VisitRequest entity."""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.engine import CursorResult
from sqlmodel import select

from src.hotel.models import Room, VisitRequest, VisitStatus
from src.hotel.repositories.base import BaseRepository


class VisitRequestRepository(BaseRepository[VisitRequest]):
    model = VisitRequest

    async def get_latest(self, room_id: str, user_id: UUID) -> VisitRequest | None:
        """Most recent request by ``user_id`` for ``room_id``, any status."""
        result = await self.session.execute(
            select(VisitRequest)
            .where(VisitRequest.room_id == room_id, VisitRequest.user_id == user_id)
            .order_by(VisitRequest.requested_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def set_status(
        self, request_id: UUID, status: VisitStatus, responded_at: datetime
    ) -> int:
        """Unconditional status write. The last committed write wins.

        Returns:
            Number of rows updated (0 if the request vanished)
        """
        result = await self.session.execute(
            update(VisitRequest)
            .where(VisitRequest.id == request_id)  # type: ignore[arg-type]
            .values(status=status.value, responded_at=responded_at)
        )
        return cast(CursorResult[Any], result).rowcount or 0

    async def list_pending_for_host(self, host_id: UUID) -> list[tuple[VisitRequest, Room]]:
        """Pending requests on the host's rooms, newest first."""
        result = await self.session.execute(
            select(VisitRequest, Room)
            .join(Room, Room.id == VisitRequest.room_id)  # type: ignore[arg-type]
            .where(
                Room.host_id == host_id,
                VisitRequest.status == VisitStatus.PENDING.value,
            )
            .order_by(VisitRequest.requested_at.desc())  # type: ignore[attr-defined]
        )
        return [(request, room) for request, room in result.all()]

    async def list_pending_for_user(self, user_id: UUID) -> list[VisitRequest]:
        result = await self.session.execute(
            select(VisitRequest)
            .where(
                VisitRequest.user_id == user_id,
                VisitRequest.status == VisitStatus.PENDING.value,
            )
            .order_by(VisitRequest.requested_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_room(self, room_id: str) -> int:
        result = await self.session.execute(
            delete(VisitRequest).where(VisitRequest.room_id == room_id)  # type: ignore[arg-type]
        )
        return cast(CursorResult[Any], result).rowcount or 0

    async def delete_by_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(VisitRequest).where(VisitRequest.user_id == user_id)  # type: ignore[arg-type]
        )
