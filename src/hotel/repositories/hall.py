"""Repository for HallParticipant entity."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.hotel.models import HallParticipant
from src.hotel.repositories.base import BaseRepository


class HallParticipantRepository(BaseRepository[HallParticipant]):
    model = HallParticipant

    async def list_online(self) -> list[HallParticipant]:
        """Online participants, latest join first."""
        result = await self.session.execute(
            select(HallParticipant)
            .where(HallParticipant.is_online == True)  # noqa: E712
            .order_by(HallParticipant.joined_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def delete_by_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(HallParticipant).where(
                HallParticipant.user_id == user_id  # type: ignore[arg-type]
            )
        )
