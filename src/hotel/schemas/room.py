from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class RoomCreate(BaseModel):
    name: str | None = Field(None, max_length=100)
    requires_approval: bool = True


class RoomRead(BaseModel):
    id: str
    name: str
    host_id: UUID
    host_name: str
    is_active: bool
    requires_approval: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ParticipantRead(BaseModel):
    room_id: str
    user_id: UUID
    user_name: str
    role: str
    joined_at: datetime

    model_config = {"from_attributes": True}
