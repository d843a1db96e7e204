"""Repository for InboxMessage entity."""

from sqlalchemy import func, update
from sqlmodel import select

from src.hotel.models import InboxMessage
from src.hotel.repositories.base import BaseRepository


class InboxMessageRepository(BaseRepository[InboxMessage]):
    model = InboxMessage

    async def list_paginated(
        self,
        cursor: str | None = None,
        limit: int = 50,
        unread_only: bool = False,
    ) -> tuple[list[InboxMessage], str | None, bool]:
        query = select(InboxMessage)
        if unread_only:
            query = query.where(InboxMessage.is_read == False)  # noqa: E712
        return await self.paginate(query, cursor, limit, InboxMessage.created_at)

    async def count_unread(self) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(InboxMessage)
            .where(InboxMessage.is_read == False)  # noqa: E712
        )
        return result.scalar_one()

    async def mark_all_read(self) -> None:
        await self.session.execute(
            update(InboxMessage)
            .where(InboxMessage.is_read == False)  # type: ignore[arg-type]  # noqa: E712
            .values(is_read=True)
        )
