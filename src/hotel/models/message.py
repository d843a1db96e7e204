"""Chat message model (Hall and Rooms share one table)."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now


class Message(SQLModel, table=True):
    """Immutable once written, apart from the soft-delete flag.

    ``room_id`` holds either a Room id or the Hall pseudo-room id, so it
    carries no foreign key.
    """

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_room_created", "room_id", "created_at"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    room_id: str = Field(max_length=64)
    sender_id: UUID = Field(foreign_key="users.id", index=True)
    sender_name: str = Field(max_length=100)
    text: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    image_ref: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    is_deleted: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
