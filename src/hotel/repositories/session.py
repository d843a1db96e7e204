"""Repository for UserSession entity."""

from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select

from src.hotel.models import UserSession
from src.hotel.models.base import utc_now
from src.hotel.repositories.base import BaseRepository


class UserSessionRepository(BaseRepository[UserSession]):
    model = UserSession

    async def get_by_hash(self, token_hash: str) -> UserSession | None:
        result = await self.session.execute(
            select(UserSession).where(UserSession.token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    async def get_valid_by_hash(self, token_hash: str) -> UserSession | None:
        """Get a non-revoked, non-expired session by hash."""
        result = await self.session.execute(
            select(UserSession).where(
                UserSession.token_hash == token_hash,
                UserSession.revoked == False,  # noqa: E712
                UserSession.expires_at > utc_now(),
            )
        )
        return result.scalar_one_or_none()

    async def revoke(self, user_session: UserSession) -> None:
        user_session.revoked = True
        self.session.add(user_session)
        await self.session.flush()

    async def revoke_all_for_user(self, user_id: UUID) -> None:
        await self.session.execute(
            update(UserSession)
            .where(UserSession.user_id == user_id)  # type: ignore[arg-type]
            .where(UserSession.revoked == False)  # type: ignore[arg-type]  # noqa: E712
            .values(revoked=True)
        )

    async def delete_by_user(self, user_id: UUID) -> None:
        await self.session.execute(
            delete(UserSession).where(UserSession.user_id == user_id)  # type: ignore[arg-type]
        )
