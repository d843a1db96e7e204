from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class VisitRequestCreate(BaseModel):
    note: str | None = Field(None, max_length=500)


class VisitRequestRead(BaseModel):
    id: UUID
    room_id: str
    user_id: UUID
    user_name: str
    note: str | None = None
    status: str
    requested_at: datetime
    responded_at: datetime | None = None

    model_config = {"from_attributes": True}


class VisitDecision(BaseModel):
    # Validated by the service so an unknown decision maps to a validation_error body
    decision: str


class PendingGroupRead(BaseModel):
    room_id: str
    room_name: str
    requests: list[VisitRequestRead]

    model_config = {"from_attributes": True}
