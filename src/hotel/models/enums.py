"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Account role. Hosts own rooms; admins see everything."""

    GUEST = "guest"
    HOST = "host"
    ADMIN = "admin"


class ParticipantRole(str, Enum):
    """Role of a user inside one room."""

    HOST = "host"
    GUEST = "guest"


class VisitStatus(str, Enum):
    """Visit request status. Approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not VisitStatus.PENDING
