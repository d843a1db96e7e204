from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class MessageCreate(BaseModel):
    text: str = ""
    image_ref: str | None = None


class MessageRead(BaseModel):
    id: UUID
    room_id: str
    sender_id: UUID
    sender_name: str
    text: str
    image_ref: str | None = None
    is_deleted: bool
    created_at: datetime

    model_config = {"from_attributes": True}
