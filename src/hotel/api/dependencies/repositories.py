"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.hotel.api.dependencies.db import DBSession
from src.hotel.repositories import (
    HallParticipantRepository,
    InboxMessageRepository,
    MessageRepository,
    ParticipantRepository,
    RoomRepository,
    UserRepository,
    UserSessionRepository,
    VisitRequestRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_session_repository(session: DBSession) -> UserSessionRepository:
    return UserSessionRepository(session)


def get_room_repository(session: DBSession) -> RoomRepository:
    return RoomRepository(session)


def get_participant_repository(session: DBSession) -> ParticipantRepository:
    return ParticipantRepository(session)


def get_visit_request_repository(session: DBSession) -> VisitRequestRepository:
    return VisitRequestRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


def get_hall_repository(session: DBSession) -> HallParticipantRepository:
    return HallParticipantRepository(session)


def get_inbox_repository(session: DBSession) -> InboxMessageRepository:
    return InboxMessageRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
SessionRepo = Annotated[UserSessionRepository, Depends(get_session_repository)]
RoomRepo = Annotated[RoomRepository, Depends(get_room_repository)]
ParticipantRepo = Annotated[ParticipantRepository, Depends(get_participant_repository)]
VisitRequestRepo = Annotated[VisitRequestRepository, Depends(get_visit_request_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]
HallRepo = Annotated[HallParticipantRepository, Depends(get_hall_repository)]
InboxRepo = Annotated[InboxMessageRepository, Depends(get_inbox_repository)]
