"""Integration test fixtures for database and HTTP client operations.

Tests run against an in-memory SQLite database shared through a StaticPool,
so the application engine and the test session see the same data. Tests
must commit their setup before calling the API: a request returning its
connection to the pool rolls back anything uncommitted.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.hotel.models  # noqa: F401 - registers tables on the metadata
from src.hotel.core import redis as redis_core
from src.hotel.core.db import engine as db_engine
from src.hotel.core.health import health_cache
from src.hotel.core.realtime import ChangeNotifier
from src.hotel.main import create_app
from src.hotel.models import User
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
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory


@pytest.fixture(autouse=True)
async def _reset_shared_state() -> AsyncGenerator[None]:
    """Reset module-level caches that would leak between tests."""
    redis_core.reset_redis_state()
    health_cache.reset()
    yield
    await redis_core.close_redis()
    health_cache.reset()


@pytest.fixture
async def engine(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with all tables, installed as the app engine."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    monkeypatch.setattr(db_engine, "_engine", test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for direct setup and assertions. Commit explicitly."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


# --- Services wired to the test session ---


@pytest.fixture
def room_service(db_session: AsyncSession, notifier: ChangeNotifier) -> RoomService:
    return RoomService(
        RoomRepository(db_session),
        ParticipantRepository(db_session),
        VisitRequestRepository(db_session),
        MessageRepository(db_session),
        db_session,
        notifier,
    )


@pytest.fixture
def visit_service(db_session: AsyncSession, notifier: ChangeNotifier) -> VisitService:
    return VisitService(
        VisitRequestRepository(db_session),
        RoomRepository(db_session),
        ParticipantRepository(db_session),
        db_session,
        notifier,
    )


@pytest.fixture
def chat_service(db_session: AsyncSession, notifier: ChangeNotifier) -> ChatService:
    return ChatService(
        MessageRepository(db_session), RoomRepository(db_session), db_session, notifier
    )


@pytest.fixture
def hall_service(db_session: AsyncSession, notifier: ChangeNotifier) -> HallService:
    return HallService(HallParticipantRepository(db_session), db_session, notifier)


@pytest.fixture
def auth_service(db_session: AsyncSession, notifier: ChangeNotifier) -> AuthService:
    return AuthService(
        UserRepository(db_session), UserSessionRepository(db_session), db_session, notifier
    )


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(UserRepository(db_session), db_session)


@pytest.fixture
def inbox_service(db_session: AsyncSession) -> InboxService:
    return InboxService(InboxMessageRepository(db_session), db_session)


@pytest.fixture
def admin_service(db_session: AsyncSession, notifier: ChangeNotifier) -> AdminService:
    return AdminService(
        UserRepository(db_session),
        UserSessionRepository(db_session),
        RoomRepository(db_session),
        ParticipantRepository(db_session),
        VisitRequestRepository(db_session),
        MessageRepository(db_session),
        HallParticipantRepository(db_session),
        InboxMessageRepository(db_session),
        db_session,
        notifier,
    )


# --- Users ---


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Persist a user built by UserFactory. Pass ``kind`` of host/admin/inactive."""

    async def _make(kind: str | None = None, **kwargs: Any) -> User:
        if kind is None:
            user = UserFactory.build(**kwargs)
        else:
            user = getattr(UserFactory, kind)(**kwargs)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
async def guest(make_user: Callable[..., Awaitable[User]]) -> User:
    return await make_user(username="bob", display_name="Bob")


@pytest.fixture
async def host(make_user: Callable[..., Awaitable[User]]) -> User:
    return await make_user("host", username="alice", display_name="Alice")


@pytest.fixture
async def admin(make_user: Callable[..., Awaitable[User]]) -> User:
    return await make_user("admin", username="root", display_name="Root")


# --- HTTP ---


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def login(client: AsyncClient) -> Callable[[User], Awaitable[dict[str, str]]]:
    """Log a user in through the API and return Authorization headers."""

    async def _login(user: User, password: str = DEFAULT_TEST_PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login", json={"username": user.username, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
