"""Room registry - creation, listing, deactivation and deletion of rooms."""

from collections.abc import Awaitable, Callable
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.exceptions import DependencyError, NotFoundError, ValidationError
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.models import ParticipantRole, Room, RoomParticipant
from src.hotel.repositories import (
    MessageRepository,
    ParticipantRepository,
    RoomRepository,
    VisitRequestRepository,
)
from src.hotel.services.base import as_row, storage_errors

logger = get_logger(__name__)


class RoomService:
    def __init__(
        self,
        room_repo: RoomRepository,
        participant_repo: ParticipantRepository,
        visit_repo: VisitRequestRepository,
        message_repo: MessageRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.room_repo = room_repo
        self.participant_repo = participant_repo
        self.visit_repo = visit_repo
        self.message_repo = message_repo
        self.session = session
        self.notifier = notifier

    async def create_room(
        self,
        host_id: UUID | None,
        host_name: str,
        name: str | None = None,
        requires_approval: bool = True,
    ) -> Room:
        """Create an active room and enroll its host as the first participant.

        Raises:
            ValidationError: If no host is given
        """
        if host_id is None:
            raise ValidationError("A room needs a host")

        room = Room(
            name=(name or "").strip() or f"{host_name}'s Room",
            host_id=host_id,
            host_name=host_name,
            requires_approval=requires_approval,
        )
        async with storage_errors(self.session, "create_room"):
            self.room_repo.add(room)
            self.participant_repo.add(
                RoomParticipant(
                    room_id=room.id,
                    user_id=host_id,
                    user_name=host_name,
                    role=ParticipantRole.HOST.value,
                )
            )
            await self.session.commit()

        logger.info("Room created", room_id=room.id, host_id=str(host_id))
        await self.notifier.publish("rooms", ChangeKind.INSERT, as_row(room))
        return room

    async def list_available_rooms(self) -> list[Room]:
        """Active rooms, newest first. Always read fresh from storage."""
        async with storage_errors(self.session, "list_available_rooms"):
            return await self.room_repo.list_active()

    async def get_all_rooms(self) -> list[Room]:
        async with storage_errors(self.session, "get_all_rooms"):
            return await self.room_repo.list_all()

    async def get_room(self, room_id: str) -> Room:
        async with storage_errors(self.session, "get_room"):
            room = await self.room_repo.get_by_id(room_id)
        if room is None:
            raise NotFoundError("Room not found", room_id=room_id)
        return room

    async def get_user_rooms(self, user_id: UUID) -> list[Room]:
        """Active rooms the user hosts or was admitted to."""
        async with storage_errors(self.session, "get_user_rooms"):
            return await self.room_repo.list_for_user(user_id)

    async def list_participants(self, room_id: str) -> list[RoomParticipant]:
        await self.get_room(room_id)
        async with storage_errors(self.session, "list_participants"):
            return await self.participant_repo.list_by_room(room_id)

    async def can_access(self, room: Room, user_id: UUID, is_admin: bool = False) -> bool:
        """Host, approved participants and admins may read and post in a room."""
        if is_admin or room.host_id == user_id:
            return True
        async with storage_errors(self.session, "can_access"):
            return await self.participant_repo.is_participant(room.id, user_id)

    async def deactivate_room(self, room_id: str) -> Room:
        """Hide the room from listings while keeping its history."""
        room = await self.get_room(room_id)
        async with storage_errors(self.session, "deactivate_room"):
            room.is_active = False
            self.room_repo.add(room)
            await self.session.commit()

        logger.info("Room deactivated", room_id=room_id)
        await self.notifier.publish("rooms", ChangeKind.UPDATE, as_row(room))
        return room

    async def delete_room(self, room_id: str) -> None:
        """Delete a room and everything that references it.

        Dependents go first: messages, visit requests, participants, then the
        room row. Each step commits on its own, so a failure part-way leaves
        the steps before it applied.

        Raises:
            NotFoundError: If the room does not exist
            DependencyError: If a step fails; names completed and failed steps
        """
        room = await self.get_room(room_id)
        snapshot = as_row(room)

        steps: list[tuple[str, Callable[[str], Awaitable[int]]]] = [
            ("messages", self.message_repo.delete_by_room),
            ("visit_requests", self.visit_repo.delete_by_room),
            ("participants", self.participant_repo.delete_by_room),
            ("room", self.room_repo.delete_by_id),
        ]
        completed: list[str] = []
        for step, delete in steps:
            try:
                removed = await delete(room_id)
                await self.session.commit()
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(
                    "Room deletion failed",
                    room_id=room_id,
                    failed_step=step,
                    completed_steps=completed,
                    error=str(e),
                )
                raise DependencyError(
                    f"Room deletion failed while removing {step}",
                    room_id=room_id,
                    completed_steps=list(completed),
                    failed_step=step,
                ) from e
            completed.append(step)
            logger.debug("Room deletion step done", room_id=room_id, step=step, removed=removed)

        logger.info("Room deleted", room_id=room_id)
        await self.notifier.publish("rooms", ChangeKind.DELETE, snapshot)
