"""Room and participant models."""

import secrets
import time
from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now
from src.hotel.models.enums import ParticipantRole

ROOM_ID_PREFIX = "room_"
ROOM_ID_SUFFIX_LENGTH = 5
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_room_id(now_ms: int | None = None) -> str:
    """Build ``room_<base36 epoch ms>_<5 random base36 chars>``."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ROOM_ID_SUFFIX_LENGTH))
    return f"{ROOM_ID_PREFIX}{to_base36(now_ms)}_{suffix}"


class Room(SQLModel, table=True):
    __tablename__ = "rooms"

    id: str = Field(default_factory=generate_room_id, primary_key=True, max_length=64)
    name: str = Field(max_length=100)
    host_id: UUID = Field(foreign_key="users.id", index=True)
    host_name: str = Field(max_length=100)  # snapshot at creation
    is_active: bool = Field(default=True, index=True)
    requires_approval: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)


class RoomParticipant(SQLModel, table=True):
    """Approved participant set of a room, host included."""

    __tablename__ = "room_participants"

    room_id: str = Field(foreign_key="rooms.id", primary_key=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    user_name: str = Field(max_length=100)
    role: str = Field(default=ParticipantRole.GUEST.value, max_length=20)
    joined_at: datetime = Field(default_factory=utc_now)
