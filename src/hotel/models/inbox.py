"""Anonymous messages addressed to the administrators."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now


class InboxMessage(SQLModel, table=True):
    __tablename__ = "inbox_messages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    message: str = Field(sa_column=Column(Text, nullable=False))
    sender_name: str | None = Field(default=None, max_length=100)
    contact: str | None = Field(default=None, max_length=255)
    sender_ip: str | None = Field(default=None, max_length=45)  # IPv4/IPv6
    is_read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now)
