"""The realtime WebSocket end to end: handshake, streaming and teardown.

The app runs inside TestClient's own event loop. Seeding happens in a
separate portal against a file database without pooling, and API calls made
while a socket is open go through the socket's portal, so the notifier and
the socket's queue stay on one loop.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from anyio.from_thread import start_blocking_portal
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

import src.hotel.models  # noqa: F401 - registers tables on the metadata
from src.hotel.api.v1.realtime import (
    CLOSE_FORBIDDEN,
    CLOSE_NOT_FOUND,
    CLOSE_ROOM_CLOSED,
    CLOSE_SERVICE_RESTART,
    CLOSE_UNAUTHORIZED,
)
from src.hotel.core.db import engine as db_engine
from src.hotel.core.realtime import ChangeNotifier
from src.hotel.core.shutdown import request_tracker
from src.hotel.main import create_app
from src.hotel.repositories import (
    MessageRepository,
    ParticipantRepository,
    RoomRepository,
    UserRepository,
    UserSessionRepository,
    VisitRequestRepository,
)
from src.hotel.services import AuthService, RoomService
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory

pytestmark = pytest.mark.integration


@pytest.mark.parametrize(
    "url",
    ["/api/v1/realtime/ws", "/api/v1/realtime/ws?token=not-a-session&room_id=room_1"],
)
def test_socket_without_valid_session_is_closed(url: str, monkeypatch: pytest.MonkeyPatch):
    # The refused handshake never touches the database; keep its lazy engine out of other tests
    monkeypatch.setattr(db_engine, "_engine", None)
    client = TestClient(create_app())

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(url):
            pass

    assert exc_info.value.code == CLOSE_UNAUTHORIZED


def test_socket_is_refused_while_draining(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(db_engine, "_engine", None)
    monkeypatch.setattr(request_tracker, "_shutting_down", True)
    client = TestClient(create_app())

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/api/v1/realtime/ws?token=anything"):
            pass

    assert exc_info.value.code == CLOSE_SERVICE_RESTART


# --- Open sockets ---


@dataclass
class Hotel:
    """Seeded accounts: guest bob, host alice with one room, admin root."""

    room_id: str
    user_ids: dict[str, Any]
    tokens: dict[str, str]


async def _seed(engine: AsyncEngine) -> Hotel:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        users = [
            UserFactory.build(username="bob", display_name="Bob"),
            UserFactory.host(username="alice", display_name="Alice"),
            UserFactory.admin(username="root", display_name="Root"),
        ]
        session.add_all(users)
        await session.commit()

        rooms = RoomService(
            RoomRepository(session),
            ParticipantRepository(session),
            VisitRequestRepository(session),
            MessageRepository(session),
            session,
            ChangeNotifier(),
        )
        room = await rooms.create_room(users[1].id, "Alice")

        auth = AuthService(
            UserRepository(session), UserSessionRepository(session), session, ChangeNotifier()
        )
        tokens = {}
        for user in users:
            tokens[user.username] = (await auth.login(user.username, DEFAULT_TEST_PASSWORD)).token

    return Hotel(
        room_id=room.id, user_ids={u.username: u.id for u in users}, tokens=tokens
    )


@pytest.fixture
def hotel(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, mock_redis_unavailable: None
) -> Hotel:
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'hotel.db'}", poolclass=NullPool
    )
    monkeypatch.setattr(db_engine, "_engine", engine)
    with start_blocking_portal() as portal:
        return portal.call(_seed, engine)


@pytest.fixture
def app(hotel: Hotel) -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


async def _api(
    app: FastAPI, method: str, url: str, token: str, payload: dict[str, Any] | None = None
) -> int:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.request(
            method, url, json=payload, headers={"Authorization": f"Bearer {token}"}
        )
    return response.status_code


def _socket_url(token: str, room_id: str | None = None) -> str:
    url = f"/api/v1/realtime/ws?token={token}"
    return f"{url}&room_id={room_id}" if room_id else url


def test_hall_socket_streams_messages_with_own_flag(
    app: FastAPI, client: TestClient, hotel: Hotel
):
    bob, alice = hotel.tokens["bob"], hotel.tokens["alice"]

    with client.websocket_connect(_socket_url(bob)) as ws:
        assert app.state.notifier.subscriber_count() > 0

        status = ws.portal.call(_api, app, "POST", "/api/v1/hall/messages", bob, {"text": "hi"})
        assert status == 201
        mine = ws.receive_json()

        status = ws.portal.call(
            _api, app, "POST", "/api/v1/hall/messages", alice, {"text": "hello bob"}
        )
        assert status == 201
        theirs = ws.receive_json()

    assert (mine["type"], mine["table"], mine["kind"]) == ("change", "messages", "insert")
    assert (mine["row"]["text"], mine["own"]) == ("hi", True)
    assert (theirs["row"]["text"], theirs["own"]) == ("hello bob", False)
    assert app.state.notifier.subscriber_count() == 0


def test_ping_is_answered(client: TestClient, hotel: Hotel):
    with client.websocket_connect(_socket_url(hotel.tokens["bob"])) as ws:
        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}


@pytest.mark.parametrize(
    ("which_room", "code"),
    [("hosted", CLOSE_FORBIDDEN), ("missing", CLOSE_NOT_FOUND)],
)
def test_room_socket_refusals(
    app: FastAPI, client: TestClient, hotel: Hotel, which_room: str, code: int
):
    room_id = hotel.room_id if which_room == "hosted" else "room_missing"

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect(_socket_url(hotel.tokens["bob"], room_id)):
            pass

    assert exc_info.value.code == code
    assert app.state.notifier.subscriber_count() == 0


def test_logout_closes_the_socket(app: FastAPI, client: TestClient, hotel: Hotel):
    token = hotel.tokens["bob"]

    with client.websocket_connect(_socket_url(token)) as ws:
        assert ws.portal.call(_api, app, "POST", "/api/v1/auth/logout", token) == 200
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()

    assert exc_info.value.code == CLOSE_UNAUTHORIZED
    assert app.state.notifier.subscriber_count() == 0


def test_deactivated_user_is_disconnected(app: FastAPI, client: TestClient, hotel: Hotel):
    url = f"/api/v1/admin/users/{hotel.user_ids['bob']}"

    with client.websocket_connect(_socket_url(hotel.tokens["bob"])) as ws:
        status = ws.portal.call(
            _api, app, "PATCH", url, hotel.tokens["root"], {"is_active": False}
        )
        assert status == 200
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()

    assert exc_info.value.code == CLOSE_UNAUTHORIZED


@pytest.mark.parametrize(
    ("method", "path", "kind"),
    [("POST", "/api/v1/rooms/{}/deactivate", "update"), ("DELETE", "/api/v1/rooms/{}", "delete")],
)
def test_closed_room_ends_its_sockets(
    app: FastAPI, client: TestClient, hotel: Hotel, method: str, path: str, kind: str
):
    alice = hotel.tokens["alice"]

    with client.websocket_connect(_socket_url(alice, hotel.room_id)) as ws:
        status = ws.portal.call(_api, app, method, path.format(hotel.room_id), alice)
        assert status in (200, 204)
        last_event = ws.receive_json()
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_json()

    assert (last_event["table"], last_event["kind"]) == ("rooms", kind)
    assert last_event["row"]["id"] == hotel.room_id
    assert exc_info.value.code == CLOSE_ROOM_CLOSED
    assert app.state.notifier.subscriber_count() == 0
