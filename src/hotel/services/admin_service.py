"""Admin service - dashboard figures and user management (admin role only)."""

from datetime import timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.config import get_settings
from src.hotel.core.exceptions import ConflictError, NotFoundError
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.core.security import hash_password
from src.hotel.models import Message, User, UserRole
from src.hotel.models.base import utc_now
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
from src.hotel.schemas.admin import DashboardStats
from src.hotel.services.base import revoked_sessions_row, storage_errors

logger = get_logger(__name__)


class AdminService:
    """Cross-cutting reads and account management for the admin panel.

    Room deletion goes through RoomService so it keeps the dependents-first
    order; inbox handling lives in InboxService.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: UserSessionRepository,
        room_repo: RoomRepository,
        participant_repo: ParticipantRepository,
        visit_repo: VisitRequestRepository,
        message_repo: MessageRepository,
        hall_repo: HallParticipantRepository,
        inbox_repo: InboxMessageRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.room_repo = room_repo
        self.participant_repo = participant_repo
        self.visit_repo = visit_repo
        self.message_repo = message_repo
        self.hall_repo = hall_repo
        self.inbox_repo = inbox_repo
        self.session = session
        self.notifier = notifier

    async def dashboard_stats(self) -> DashboardStats:
        """Counts shown on the dashboard.

        "Active users" are those who logged in within the configured window.
        """
        window = timedelta(minutes=get_settings().active_user_window_minutes)
        async with storage_errors(self.session, "dashboard_stats"):
            return DashboardStats(
                total_users=await self.user_repo.count(),
                active_rooms=await self.room_repo.count_active(),
                total_messages=await self.message_repo.count_visible(),
                active_users=await self.user_repo.count_active_since(utc_now() - window),
                unread_inbox=await self.inbox_repo.count_unread(),
            )

    async def recent_activity(self, limit: int = 10) -> list[Message]:
        async with storage_errors(self.session, "recent_activity"):
            return await self.message_repo.list_recent(limit)

    async def list_users(
        self,
        query: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[User], str | None, bool]:
        async with storage_errors(self.session, "list_users"):
            return await self.user_repo.search(query, cursor, limit)

    async def get_user(self, user_id: UUID) -> User:
        async with storage_errors(self.session, "get_user"):
            user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", user_id=str(user_id))
        return user

    async def create_user(
        self,
        username: str,
        display_name: str,
        password: str,
        role: UserRole = UserRole.GUEST,
    ) -> User:
        async with storage_errors(self.session, "create_user"):
            if await self.user_repo.exists_by_username(username):
                raise ConflictError("Username is already taken", username=username)
            user = User(
                username=username.strip().lower(),
                display_name=display_name.strip(),
                hashed_password=hash_password(password),
                role=role.value,
            )
            self.user_repo.add(user)
            await self.session.commit()

        logger.info("User created by admin", user_id=str(user.id), role=user.role)
        return user

    async def update_user(
        self,
        user_id: UUID,
        display_name: str | None = None,
        role: UserRole | None = None,
        is_active: bool | None = None,
        password: str | None = None,
    ) -> User:
        """Apply the given changes. Deactivation and password resets end open sessions."""
        user = await self.get_user(user_id)
        end_sessions = False
        async with storage_errors(self.session, "update_user"):
            if display_name is not None:
                user.display_name = display_name.strip()
            if role is not None:
                user.role = role.value
            if is_active is not None:
                end_sessions = user.is_active and not is_active
                user.is_active = is_active
            if password is not None:
                user.hashed_password = hash_password(password)
                end_sessions = True
            user.updated_at = utc_now()
            self.user_repo.add(user)
            if end_sessions:
                await self.session_repo.revoke_all_for_user(user_id)
            await self.session.commit()

        logger.info(
            "User updated by admin",
            user_id=str(user_id),
            role=user.role,
            is_active=user.is_active,
            sessions_revoked=end_sessions,
        )
        if end_sessions:
            await self.notifier.publish(
                "user_sessions", ChangeKind.UPDATE, revoked_sessions_row(user_id)
            )
        return user

    async def delete_user(self, user_id: UUID, actor_id: UUID) -> None:
        """Remove an account and the rows that reference it, in one transaction.

        Raises:
            NotFoundError: Unknown user
            ConflictError: Deleting yourself, or the user still hosts rooms
        """
        if user_id == actor_id:
            raise ConflictError("Admins cannot delete their own account")

        user = await self.get_user(user_id)
        async with storage_errors(self.session, "delete_user"):
            hosted = await self.room_repo.list_by_host(user_id)
            if hosted:
                raise ConflictError(
                    "User still hosts rooms; delete them first",
                    room_ids=[room.id for room in hosted],
                )
            await self.message_repo.delete_by_sender(user_id)
            await self.visit_repo.delete_by_user(user_id)
            await self.participant_repo.delete_by_user(user_id)
            await self.hall_repo.delete_by_user(user_id)
            await self.session_repo.delete_by_user(user_id)
            await self.user_repo.delete(user)
            await self.session.commit()

        logger.info("User deleted by admin", user_id=str(user_id))
        await self.notifier.publish(
            "user_sessions", ChangeKind.DELETE, revoked_sessions_row(user_id)
        )
