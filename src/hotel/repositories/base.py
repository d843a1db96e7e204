"""Base repository with common CRUD operations."""

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.hotel.schemas.pagination import decode_cursor, encode_cursor

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Data access only. Transaction control (commit) belongs to the services."""

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID | str) -> ModelType | None:
        return await self.session.get(self.model, id)

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Keyset pagination, newest first.

        The cursor encodes the ``cursor_field`` value of the last item
        returned. An undecodable cursor restarts from the first page.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                cursor_value: datetime | str = decode_cursor(cursor)
                try:
                    cursor_value = datetime.fromisoformat(cursor_value)
                except ValueError:
                    pass
                query = query.where(cursor_field < cursor_value)
            except ValueError:
                pass

        query = query.order_by(cursor_field.desc()).limit(limit + 1)
        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more
