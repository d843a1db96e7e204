from src.hotel.services.admin_service import AdminService
from src.hotel.services.auth_service import AuthService, LoginResult
from src.hotel.services.chat_service import ChatService
from src.hotel.services.hall_service import HallService
from src.hotel.services.inbox_service import InboxService
from src.hotel.services.room_service import RoomService
from src.hotel.services.user_service import UserService
from src.hotel.services.visit_service import PendingGroup, VisitService

__all__ = [
    "AdminService",
    "AuthService",
    "ChatService",
    "HallService",
    "InboxService",
    "LoginResult",
    "PendingGroup",
    "RoomService",
    "UserService",
    "VisitService",
]
