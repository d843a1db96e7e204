"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.hotel.api.dependencies.db import DBSession, Notifier
from src.hotel.api.dependencies.repositories import (
    HallRepo,
    InboxRepo,
    MessageRepo,
    ParticipantRepo,
    RoomRepo,
    SessionRepo,
    UserRepo,
    VisitRequestRepo,
)
from src.hotel.services import (
    AdminService,
    AuthService,
    ChatService,
    HallService,
    InboxService,
    RoomService,
    UserService,
    VisitService,
)


def get_auth_service(
    user_repo: UserRepo, session_repo: SessionRepo, session: DBSession, notifier: Notifier
) -> AuthService:
    return AuthService(user_repo, session_repo, session, notifier)


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_room_service(
    room_repo: RoomRepo,
    participant_repo: ParticipantRepo,
    visit_repo: VisitRequestRepo,
    message_repo: MessageRepo,
    session: DBSession,
    notifier: Notifier,
) -> RoomService:
    return RoomService(room_repo, participant_repo, visit_repo, message_repo, session, notifier)


def get_visit_service(
    visit_repo: VisitRequestRepo,
    room_repo: RoomRepo,
    participant_repo: ParticipantRepo,
    session: DBSession,
    notifier: Notifier,
) -> VisitService:
    return VisitService(visit_repo, room_repo, participant_repo, session, notifier)


def get_chat_service(
    message_repo: MessageRepo,
    room_repo: RoomRepo,
    session: DBSession,
    notifier: Notifier,
) -> ChatService:
    return ChatService(message_repo, room_repo, session, notifier)


def get_hall_service(hall_repo: HallRepo, session: DBSession, notifier: Notifier) -> HallService:
    return HallService(hall_repo, session, notifier)


def get_inbox_service(inbox_repo: InboxRepo, session: DBSession) -> InboxService:
    return InboxService(inbox_repo, session)


def get_admin_service(
    user_repo: UserRepo,
    session_repo: SessionRepo,
    room_repo: RoomRepo,
    participant_repo: ParticipantRepo,
    visit_repo: VisitRequestRepo,
    message_repo: MessageRepo,
    hall_repo: HallRepo,
    inbox_repo: InboxRepo,
    session: DBSession,
    notifier: Notifier,
) -> AdminService:
    return AdminService(
        user_repo,
        session_repo,
        room_repo,
        participant_repo,
        visit_repo,
        message_repo,
        hall_repo,
        inbox_repo,
        session,
        notifier,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RoomServiceDep = Annotated[RoomService, Depends(get_room_service)]
VisitServiceDep = Annotated[VisitService, Depends(get_visit_service)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
HallServiceDep = Annotated[HallService, Depends(get_hall_service)]
InboxServiceDep = Annotated[InboxService, Depends(get_inbox_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
