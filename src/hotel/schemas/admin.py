from pydantic import BaseModel, Field, field_validator

from src.hotel.models import UserRole
from src.hotel.schemas.auth import USERNAME_PATTERN
from src.hotel.schemas.validators import check_password_strength, normalize_username


class DashboardStats(BaseModel):
    total_users: int
    active_rooms: int
    total_messages: int
    active_users: int
    unread_inbox: int


class AdminUserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    display_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8, max_length=100)
    role: UserRole = UserRole.GUEST

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str) -> str:
        return normalize_username(v)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class AdminUserUpdate(BaseModel):
    display_name: str | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = None
    is_active: bool | None = None
    password: str | None = Field(None, min_length=8, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str | None) -> str | None:
        return check_password_strength(v) if v is not None else v
