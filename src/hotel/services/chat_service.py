"""Chat messages for the Hall and for rooms."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.config import get_settings
from src.hotel.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.models import Message
from src.hotel.repositories import MessageRepository, RoomRepository
from src.hotel.services.base import as_row, storage_errors

logger = get_logger(__name__)


class ChatService:
    def __init__(
        self,
        message_repo: MessageRepository,
        room_repo: RoomRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.message_repo = message_repo
        self.room_repo = room_repo
        self.session = session
        self.notifier = notifier
        self.settings = get_settings()

    def is_hall(self, room_id: str) -> bool:
        return room_id == self.settings.hall_room_id

    async def send_message(
        self,
        room_id: str,
        sender_id: UUID,
        sender_name: str,
        text: str,
        image_ref: str | None = None,
    ) -> Message:
        """Post a message to the Hall or to an active room.

        Raises:
            ValidationError: Empty message or text over the length limit
            NotFoundError: Room missing or inactive
        """
        text = (text or "").strip()
        if not text and not image_ref:
            raise ValidationError("Message needs text or an image")
        if len(text) > self.settings.max_message_length:
            raise ValidationError(
                "Message is too long", max_length=self.settings.max_message_length
            )

        async with storage_errors(self.session, "send_message"):
            if not self.is_hall(room_id):
                room = await self.room_repo.get_by_id(room_id)
                if room is None or not room.is_active:
                    raise NotFoundError("Room not found", room_id=room_id)

            message = Message(
                room_id=room_id,
                sender_id=sender_id,
                sender_name=sender_name,
                text=text,
                image_ref=image_ref,
            )
            self.message_repo.add(message)
            await self.session.commit()

        logger.debug("Message sent", room_id=room_id, message_id=str(message.id))
        await self.notifier.publish("messages", ChangeKind.INSERT, as_row(message))
        return message

    async def get_messages(self, room_id: str, limit: int | None = None) -> list[Message]:
        """Visible messages, oldest first."""
        async with storage_errors(self.session, "get_messages"):
            return await self.message_repo.list_by_room(room_id, limit)

    async def delete_message(self, message_id: UUID, actor_id: UUID, is_admin: bool) -> Message:
        """Soft-delete a message. Only its sender or an admin may do it."""
        async with storage_errors(self.session, "delete_message"):
            message = await self.message_repo.get_by_id(message_id)
            if message is None:
                raise NotFoundError("Message not found", message_id=str(message_id))
            if message.sender_id != actor_id and not is_admin:
                raise AuthorizationError("Only the sender or an admin can delete a message")
            if message.is_deleted:
                return message

            message.is_deleted = True
            self.message_repo.add(message)
            await self.session.commit()

        logger.info(
            "Message deleted",
            message_id=str(message_id),
            room_id=message.room_id,
            by_admin=is_admin and message.sender_id != actor_id,
        )
        await self.notifier.publish("messages", ChangeKind.UPDATE, as_row(message))
        return message

    async def get_message(self, message_id: UUID) -> Message:
        async with storage_errors(self.session, "get_message"):
            message = await self.message_repo.get_by_id(message_id)
        if message is None:
            raise NotFoundError("Message not found", message_id=str(message_id))
        return message
