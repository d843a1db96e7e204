from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.hotel.schemas.validators import check_password_strength


class UserRead(BaseModel):
    id: UUID
    username: str
    display_name: str
    role: str
    is_active: bool
    avatar_ref: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    display_name: str | None = Field(None, max_length=100)
    avatar_ref: str | None = None
    password: str | None = Field(None, min_length=8, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str | None) -> str | None:
        return check_password_strength(v) if v is not None else v
