"""User service - profile reads and self-service updates."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.config import get_settings
from src.hotel.core.exceptions import ValidationError
from src.hotel.core.logging import get_logger
from src.hotel.core.security import hash_password
from src.hotel.models import User
from src.hotel.models.base import utc_now
from src.hotel.repositories import UserRepository
from src.hotel.services.base import storage_errors

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        async with storage_errors(self.session, "get_user"):
            return await self.user_repo.get_by_id(user_id)

    async def update_profile(
        self,
        user: User,
        display_name: str | None = None,
        avatar_ref: str | None = None,
        password: str | None = None,
    ) -> User:
        """Update the caller's own profile. Omitted fields stay unchanged.

        Raises:
            ValidationError: Blank display name or avatar over the size limit
        """
        settings = get_settings()
        if display_name is not None and not display_name.strip():
            raise ValidationError("Display name cannot be empty")
        if avatar_ref is not None and len(avatar_ref.encode()) > settings.max_avatar_bytes:
            raise ValidationError("Avatar is too large", max_bytes=settings.max_avatar_bytes)

        changed: list[str] = []
        if display_name is not None:
            user.display_name = display_name.strip()
            changed.append("display_name")
        if avatar_ref is not None:
            user.avatar_ref = avatar_ref or None
            changed.append("avatar_ref")
        if password is not None:
            user.hashed_password = hash_password(password)
            changed.append("password")

        if not changed:
            return user

        async with storage_errors(self.session, "update_profile"):
            user.updated_at = utc_now()
            self.user_repo.add(user)
            await self.session.commit()

        logger.info("Profile updated", user_id=str(user.id), fields=changed)
        return user
