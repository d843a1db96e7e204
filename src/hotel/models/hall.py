"""Hall presence model."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now


class HallParticipant(SQLModel, table=True):
    """Ephemeral presence: one row per user, upserted on join."""

    __tablename__ = "hall_participants"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    user_name: str = Field(max_length=100)
    is_online: bool = Field(default=True, index=True)
    joined_at: datetime = Field(default_factory=utc_now)
