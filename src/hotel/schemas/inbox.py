from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class InboxSubmit(BaseModel):
    message: str = Field(max_length=5000)
    sender_name: str | None = Field(None, max_length=100)
    contact: str | None = Field(None, max_length=255)


class InboxMessageRead(BaseModel):
    id: UUID
    message: str
    sender_name: str | None = None
    contact: str | None = None
    sender_ip: str | None = None
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class InboxSubmitResponse(BaseModel):
    id: UUID
    received: bool = True
