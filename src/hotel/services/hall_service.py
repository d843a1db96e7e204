"""Hall presence - who is currently in the lobby."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.models import HallParticipant
from src.hotel.models.base import utc_now
from src.hotel.repositories import HallParticipantRepository
from src.hotel.services.base import as_row, storage_errors

logger = get_logger(__name__)


class HallService:
    def __init__(
        self,
        hall_repo: HallParticipantRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.hall_repo = hall_repo
        self.session = session
        self.notifier = notifier

    async def join_hall(self, user_id: UUID, user_name: str) -> HallParticipant:
        """Mark the user online, creating their presence row on first join."""
        async with storage_errors(self.session, "join_hall"):
            try:
                participant, kind = await self._upsert(user_id, user_name)
            except IntegrityError:
                # A concurrent join inserted the row first
                await self.session.rollback()
                participant, kind = await self._upsert(user_id, user_name)

        logger.debug("Joined hall", user_id=str(user_id))
        await self.notifier.publish("hall_participants", kind, as_row(participant))
        return participant

    async def _upsert(self, user_id: UUID, user_name: str) -> tuple[HallParticipant, ChangeKind]:
        participant = await self.hall_repo.get_by_id(user_id)
        kind = ChangeKind.UPDATE
        if participant is None:
            participant = HallParticipant(user_id=user_id, user_name=user_name)
            kind = ChangeKind.INSERT
        participant.user_name = user_name
        participant.is_online = True
        participant.joined_at = utc_now()
        self.hall_repo.add(participant)
        await self.session.commit()
        return participant, kind

    async def leave_hall(self, user_id: UUID) -> HallParticipant | None:
        """Mark the user offline. Returns None if they never joined."""
        async with storage_errors(self.session, "leave_hall"):
            participant = await self.hall_repo.get_by_id(user_id)
            if participant is None or not participant.is_online:
                return participant
            participant.is_online = False
            self.hall_repo.add(participant)
            await self.session.commit()

        logger.debug("Left hall", user_id=str(user_id))
        await self.notifier.publish("hall_participants", ChangeKind.UPDATE, as_row(participant))
        return participant

    async def list_online(self) -> list[HallParticipant]:
        async with storage_errors(self.session, "list_online"):
            return await self.hall_repo.list_online()
