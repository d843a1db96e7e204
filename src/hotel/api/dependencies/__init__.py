"""FastAPI dependency injection definitions."""

from src.hotel.api.dependencies.auth import (
    AdminUser,
    CurrentUser,
    HostUser,
    SessionToken,
    get_current_user,
    require_roles,
)
from src.hotel.api.dependencies.db import DBSession, Notifier, get_db_session, get_notifier
from src.hotel.api.dependencies.services import (
    AdminServiceDep,
    AuthServiceDep,
    ChatServiceDep,
    HallServiceDep,
    InboxServiceDep,
    RoomServiceDep,
    UserServiceDep,
    VisitServiceDep,
)

__all__ = [
    # Database
    "DBSession",
    "Notifier",
    "get_db_session",
    "get_notifier",
    # Auth
    "AdminUser",
    "CurrentUser",
    "HostUser",
    "SessionToken",
    "get_current_user",
    "require_roles",
    # Services
    "AdminServiceDep",
    "AuthServiceDep",
    "ChatServiceDep",
    "HallServiceDep",
    "InboxServiceDep",
    "RoomServiceDep",
    "UserServiceDep",
    "VisitServiceDep",
]
