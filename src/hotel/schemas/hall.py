from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class HallParticipantRead(BaseModel):
    user_id: UUID
    user_name: str
    is_online: bool
    joined_at: datetime

    model_config = {"from_attributes": True}
