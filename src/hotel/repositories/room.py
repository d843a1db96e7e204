"""Repositories for Room and RoomParticipant entities."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import delete, func, or_
from sqlalchemy.engine import CursorResult
from sqlmodel import select

from src.hotel.models import Room, RoomParticipant
from src.hotel.repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    model = Room

    async def list_active(self) -> list[Room]:
        """Active rooms, newest first."""
        result = await self.session.execute(
            select(Room)
            .where(Room.is_active == True)  # noqa: E712
            .order_by(Room.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[Room]:
        """Every room, active or not, newest first."""
        result = await self.session.execute(
            select(Room).order_by(Room.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID) -> list[Room]:
        """Active rooms the user hosts or is an approved participant of."""
        participant_rooms = select(RoomParticipant.room_id).where(
            RoomParticipant.user_id == user_id
        )
        result = await self.session.execute(
            select(Room)
            .where(
                Room.is_active == True,  # noqa: E712
                or_(
                    Room.host_id == user_id,
                    Room.id.in_(participant_rooms),  # type: ignore[attr-defined]
                ),
            )
            .order_by(Room.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_by_host(self, host_id: UUID) -> list[Room]:
        result = await self.session.execute(select(Room).where(Room.host_id == host_id))
        return list(result.scalars().all())

    async def count_active(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Room).where(Room.is_active == True)  # noqa: E712
        )
        return result.scalar_one()

    async def delete_by_id(self, room_id: str) -> int:
        result = await self.session.execute(
            delete(Room).where(Room.id == room_id)  # type: ignore[arg-type]
        )
        return cast(CursorResult[Any], result).rowcount or 0


class ParticipantRepository(BaseRepository[RoomParticipant]):
    model = RoomParticipant

    async def get(self, room_id: str, user_id: UUID) -> RoomParticipant | None:
        return await self.session.get(RoomParticipant, (room_id, user_id))

    async def is_participant(self, room_id: str, user_id: UUID) -> bool:
        return await self.get(room_id, user_id) is not None

    async def list_by_room(self, room_id: str) -> list[RoomParticipant]:
        result = await self.session.execute(
            select(RoomParticipant)
            .where(RoomParticipant.room_id == room_id)
            .order_by(RoomParticipant.joined_at)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def delete_by_room(self, room_id: str) -> int:
        result = await self.session.execute(
            delete(RoomParticipant).where(
                RoomParticipant.room_id == room_id  # type: ignore[arg-type]
            )
        )
        return cast(CursorResult[Any], result).rowcount or 0

    async def delete_by_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(RoomParticipant).where(
                RoomParticipant.user_id == user_id  # type: ignore[arg-type]
            )
        )
