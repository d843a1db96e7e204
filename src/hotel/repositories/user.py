"""Repository for User entity."""

from datetime import datetime

from sqlalchemy import func, or_
from sqlmodel import select

from src.hotel.models import User
from src.hotel.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username, case-insensitively."""
        result = await self.session.execute(
            select(User).where(User.username == username.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        user = await self.get_by_username(username)
        return user is not None

    async def search(
        self,
        query: str | None = None,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[User], str | None, bool]:
        """List users newest first, optionally filtered by username or display name."""
        statement = select(User)
        if query:
            pattern = f"%{query.strip().lower()}%"
            statement = statement.where(
                or_(
                    User.username.like(pattern),  # type: ignore[attr-defined]
                    func.lower(User.display_name).like(pattern),
                )
            )
        return await self.paginate(statement, cursor, limit, User.created_at)

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def count_active_since(self, cutoff: datetime) -> int:
        """Count users who logged in at or after ``cutoff``."""
        result = await self.session.execute(
            select(func.count())
            .select_from(User)
            .where(User.last_login_at >= cutoff)  # type: ignore[operator]
        )
        return result.scalar_one()
