from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.hotel.schemas.user import UserRead
from src.hotel.schemas.validators import check_password_strength, normalize_username

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=100)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserRead


class RegisterRequest(BaseModel):
    """Self-service sign-up. New accounts are guests."""

    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    display_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8, max_length=100)

    @field_validator("username")
    @classmethod
    def lowercase_username(cls, v: str) -> str:
        return normalize_username(v)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        return check_password_strength(v)


class LogoutResponse(BaseModel):
    revoked: bool
