"""Admin inbox - anonymous messages from visitors to the administrators."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.exceptions import NotFoundError, ValidationError
from src.hotel.core.logging import get_logger
from src.hotel.models import InboxMessage
from src.hotel.repositories import InboxMessageRepository
from src.hotel.services.base import storage_errors

logger = get_logger(__name__)


class InboxService:
    def __init__(self, inbox_repo: InboxMessageRepository, session: AsyncSession):
        self.inbox_repo = inbox_repo
        self.session = session

    async def submit(
        self,
        message: str,
        sender_name: str | None = None,
        contact: str | None = None,
        sender_ip: str | None = None,
    ) -> InboxMessage:
        message = (message or "").strip()
        if not message:
            raise ValidationError("Message cannot be empty")

        entry = InboxMessage(
            message=message,
            sender_name=(sender_name or "").strip() or None,
            contact=(contact or "").strip() or None,
            sender_ip=sender_ip,
        )
        async with storage_errors(self.session, "submit_inbox_message"):
            self.inbox_repo.add(entry)
            await self.session.commit()

        logger.info("Inbox message received", inbox_id=str(entry.id))
        return entry

    async def list_messages(
        self,
        cursor: str | None = None,
        limit: int = 50,
        unread_only: bool = False,
    ) -> tuple[list[InboxMessage], str | None, bool]:
        async with storage_errors(self.session, "list_inbox"):
            return await self.inbox_repo.list_paginated(cursor, limit, unread_only)

    async def mark_read(self, message_id: UUID) -> InboxMessage:
        async with storage_errors(self.session, "mark_inbox_read"):
            entry = await self._get(message_id)
            entry.is_read = True
            self.inbox_repo.add(entry)
            await self.session.commit()
        return entry

    async def mark_all_read(self) -> None:
        async with storage_errors(self.session, "mark_all_inbox_read"):
            await self.inbox_repo.mark_all_read()
            await self.session.commit()

    async def delete(self, message_id: UUID) -> None:
        async with storage_errors(self.session, "delete_inbox_message"):
            entry = await self._get(message_id)
            await self.inbox_repo.delete(entry)
            await self.session.commit()
        logger.info("Inbox message deleted", inbox_id=str(message_id))

    async def count_unread(self) -> int:
        async with storage_errors(self.session, "count_unread_inbox"):
            return await self.inbox_repo.count_unread()

    async def _get(self, message_id: UUID) -> InboxMessage:
        entry = await self.inbox_repo.get_by_id(message_id)
        if entry is None:
            raise NotFoundError("Inbox message not found", inbox_id=str(message_id))
        return entry
