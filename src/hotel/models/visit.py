"""Visit request model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from src.hotel.models.base import utc_now
from src.hotel.models.enums import VisitStatus

PENDING_ONLY = "status = 'pending'"


class VisitRequest(SQLModel, table=True):
    __tablename__ = "visit_requests"
    __table_args__ = (
        Index("ix_visit_requests_room_user", "room_id", "user_id"),
        # At most one pending request per guest and room, however many tabs race
        Index(
            "uq_visit_requests_pending",
            "room_id",
            "user_id",
            unique=True,
            postgresql_where=text(PENDING_ONLY),
            sqlite_where=text(PENDING_ONLY),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    room_id: str = Field(foreign_key="rooms.id", index=True, max_length=64)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    user_name: str = Field(max_length=100)
    note: str | None = Field(default=None, max_length=500)
    status: str = Field(default=VisitStatus.PENDING.value, max_length=20, index=True)
    requested_at: datetime = Field(default_factory=utc_now)
    responded_at: datetime | None = Field(default=None)

    @property
    def status_enum(self) -> VisitStatus:
        return VisitStatus(self.status)
