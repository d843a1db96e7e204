"""Database models.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from src.hotel.models.enums import ParticipantRole, UserRole, VisitStatus
from src.hotel.models.hall import HallParticipant
from src.hotel.models.inbox import InboxMessage
from src.hotel.models.message import Message
from src.hotel.models.room import Room, RoomParticipant, generate_room_id
from src.hotel.models.user import User, UserSession
from src.hotel.models.visit import VisitRequest

__all__ = [
    # Enums
    "ParticipantRole",
    "UserRole",
    "VisitStatus",
    # Models
    "HallParticipant",
    "InboxMessage",
    "Message",
    "Room",
    "RoomParticipant",
    "User",
    "UserSession",
    "VisitRequest",
    # Helpers
    "generate_room_id",
]
