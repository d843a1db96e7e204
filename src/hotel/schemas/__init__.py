from src.hotel.schemas.admin import AdminUserCreate, AdminUserUpdate, DashboardStats
from src.hotel.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, RegisterRequest
from src.hotel.schemas.hall import HallParticipantRead
from src.hotel.schemas.inbox import InboxMessageRead, InboxSubmit, InboxSubmitResponse
from src.hotel.schemas.message import MessageCreate, MessageRead
from src.hotel.schemas.pagination import PaginatedResponse
from src.hotel.schemas.room import ParticipantRead, RoomCreate, RoomRead
from src.hotel.schemas.user import ProfileUpdate, UserRead
from src.hotel.schemas.visit import (
    PendingGroupRead,
    VisitDecision,
    VisitRequestCreate,
    VisitRequestRead,
)

__all__ = [
    "AdminUserCreate",
    "AdminUserUpdate",
    "DashboardStats",
    "HallParticipantRead",
    "InboxMessageRead",
    "InboxSubmit",
    "InboxSubmitResponse",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "MessageCreate",
    "MessageRead",
    "PaginatedResponse",
    "ParticipantRead",
    "PendingGroupRead",
    "ProfileUpdate",
    "RegisterRequest",
    "RoomCreate",
    "RoomRead",
    "UserRead",
    "VisitDecision",
    "VisitRequestCreate",
    "VisitRequestRead",
]
