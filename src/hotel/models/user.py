"""User and session models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now
from src.hotel.models.enums import UserRole


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(max_length=50, unique=True, index=True)  # stored lowercase
    display_name: str = Field(max_length=100)
    hashed_password: str = Field(max_length=255)
    role: str = Field(default=UserRole.GUEST.value, max_length=20)
    is_active: bool = Field(default=True)
    avatar_ref: str | None = Field(default=None)
    last_login_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> UserRole:
        return UserRole(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


class UserSession(SQLModel, table=True):
    """Persisted login session. Only the token hash is stored."""

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=255, unique=True, index=True)
    expires_at: datetime
    revoked: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
