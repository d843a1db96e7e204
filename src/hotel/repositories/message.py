"""Repository for Message entity."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.engine import CursorResult
from sqlmodel import select

from src.hotel.models import Message
from src.hotel.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def list_by_room(self, room_id: str, limit: int | None = None) -> list[Message]:
        """Visible messages of a room, oldest first.

        With ``limit``, only the latest ``limit`` messages are returned, still
        in ascending order.
        """
        query = select(Message).where(
            Message.room_id == room_id,
            Message.is_deleted == False,  # noqa: E712
        )
        if limit is None:
            result = await self.session.execute(
                query.order_by(Message.created_at)  # type: ignore[arg-type]
            )
            return list(result.scalars().all())

        result = await self.session.execute(
            query.order_by(Message.created_at.desc()).limit(limit)  # type: ignore[attr-defined]
        )
        return list(reversed(result.scalars().all()))

    async def list_recent(self, limit: int) -> list[Message]:
        """Latest visible messages across the Hall and every room, newest first."""
        result = await self.session.execute(
            select(Message)
            .where(Message.is_deleted == False)  # noqa: E712
            .order_by(Message.created_at.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_visible(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Message)
            .where(Message.is_deleted == False)  # noqa: E712
        )
        return result.scalar_one()

    async def delete_by_room(self, room_id: str) -> int:
        result = await self.session.execute(
            delete(Message).where(Message.room_id == room_id)  # type: ignore[arg-type]
        )
        return cast(CursorResult[Any], result).rowcount or 0

    async def delete_by_sender(self, sender_id: UUID) -> None:
        await self.session.execute(
            delete(Message).where(Message.sender_id == sender_id)  # type: ignore[arg-type]
        )
