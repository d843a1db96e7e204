"""Repositories for data access.

Repositories never commit; the service layer owns transactions.
"""

from src.hotel.repositories.base import BaseRepository
from src.hotel.repositories.hall import HallParticipantRepository
from src.hotel.repositories.inbox import InboxMessageRepository
from src.hotel.repositories.message import MessageRepository
from src.hotel.repositories.room import ParticipantRepository, RoomRepository
from src.hotel.repositories.session import UserSessionRepository
from src.hotel.repositories.user import UserRepository
from src.hotel.repositories.visit_request import VisitRequestRepository

__all__ = [
    "BaseRepository",
    "HallParticipantRepository",
    "InboxMessageRepository",
    "MessageRepository",
    "ParticipantRepository",
    "RoomRepository",
    "UserRepository",
    "UserSessionRepository",
    "VisitRequestRepository",
]
