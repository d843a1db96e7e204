"""Database session and notifier dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from src.hotel.core.db import get_session
from src.hotel.core.realtime import ChangeNotifier


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    async with get_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_notifier(connection: HTTPConnection) -> ChangeNotifier:
    """The application's notifier, created in create_app()."""
    notifier: ChangeNotifier = connection.app.state.notifier
    return notifier


Notifier = Annotated[ChangeNotifier, Depends(get_notifier)]
