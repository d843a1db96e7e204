"""Realtime WebSocket: pushes change events for the Hall or one room.

Connect with ``/api/v1/realtime/ws?token=<session token>[&room_id=<room>]``.
Without ``room_id`` the socket follows the Hall (messages and presence).
Every event arrives as ``{"type": "change", "table", "kind", "row", "own"}``;
``own`` is true when the caller produced the row.

The server ends the socket with 4401 once its session is revoked (logout,
deactivation, account deletion) and with 4410 once its room is deactivated
or deleted; the room's closing event is delivered before the close frame.
"""

import asyncio
import contextlib
import json
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from src.hotel.api.dependencies import DBSession
from src.hotel.core.config import get_settings
from src.hotel.core.exceptions import HotelError
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeEvent, ChangeKind, ChangeNotifier, Subscription
from src.hotel.core.security import hash_token
from src.hotel.core.shutdown import request_tracker
from src.hotel.models import User
from src.hotel.repositories import (
    MessageRepository,
    ParticipantRepository,
    RoomRepository,
    UserRepository,
    UserSessionRepository,
    VisitRequestRepository,
)
from src.hotel.services import AuthService, RoomService

logger = get_logger(__name__)

router = APIRouter(prefix="/realtime", tags=["realtime"])

CLOSE_SERVICE_RESTART = 1012
CLOSE_UNAUTHORIZED = 4401
CLOSE_FORBIDDEN = 4403
CLOSE_NOT_FOUND = 4404
CLOSE_ROOM_CLOSED = 4410
QUEUE_SIZE = 256


class RealtimeChannel:
    """Subscriptions of one socket, buffered through a bounded queue.

    Handlers only enqueue, so a slow client never stalls the publisher.
    When the queue is full the event is dropped for this client. ``None``
    in the queue tells the pump to stop; ``close_code`` says why.
    """

    def __init__(self, notifier: ChangeNotifier, user_id: Any) -> None:
        self.notifier = notifier
        self.user_id = user_id
        self.queue: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue(maxsize=QUEUE_SIZE)
        self.subscriptions: list[Subscription] = []
        self.close_code: int | None = None

    def follow(self, table: str, filters: dict[str, Any] | None = None) -> None:
        self.subscriptions.append(self.notifier.subscribe(table, self._enqueue, filters))

    def watch_session(self, token_hash: str) -> None:
        """End the socket when this session, or every session of the user, is revoked."""

        async def on_revoked(event: ChangeEvent) -> None:
            if event.row.get("token_hash") in (None, token_hash):
                self.end(CLOSE_UNAUTHORIZED)

        self.subscriptions.append(
            self.notifier.subscribe("user_sessions", on_revoked, {"user_id": self.user_id})
        )

    def watch_room(self, room_id: str) -> None:
        """Forward changes of the room itself and end the socket once it closes."""

        async def on_room_change(event: ChangeEvent) -> None:
            await self._enqueue(event)
            if event.kind is ChangeKind.DELETE or event.row.get("is_active") is False:
                self.end(CLOSE_ROOM_CLOSED)

        self.subscriptions.append(self.notifier.subscribe("rooms", on_room_change, {"id": room_id}))

    async def _enqueue(self, event: ChangeEvent) -> None:
        if self.close_code is not None:
            return
        payload = {"type": "change", **event.to_dict(), "own": event.is_from(self.user_id)}
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning("Realtime queue full, dropping event", table=event.table)

    def end(self, code: int) -> None:
        """Stop following everything; the pump flushes what is queued, then stops."""
        if self.close_code is not None:
            return
        self.close_code = code
        self.close()
        # A full queue still drains; the pump checks close_code after each send
        with contextlib.suppress(asyncio.QueueFull):
            self.queue.put_nowait(None)

    def close(self) -> None:
        for subscription in self.subscriptions:
            subscription.cancel()
        self.subscriptions.clear()


async def _authorize(
    websocket: WebSocket, session: DBSession, token: str | None, room_id: str | None
) -> User | None:
    """Resolve the caller and check room access. Closes the socket on refusal."""
    if not token:
        await websocket.close(code=CLOSE_UNAUTHORIZED)
        return None

    auth = AuthService(
        UserRepository(session),
        UserSessionRepository(session),
        session,
        websocket.app.state.notifier,
    )
    try:
        user = await auth.restore_session(token)
    except HotelError:
        await websocket.close(code=CLOSE_UNAUTHORIZED)
        return None

    if room_id is None or room_id == get_settings().hall_room_id:
        return user

    rooms = RoomService(
        RoomRepository(session),
        ParticipantRepository(session),
        VisitRequestRepository(session),
        MessageRepository(session),
        session,
        websocket.app.state.notifier,
    )
    try:
        room = await rooms.get_room(room_id)
    except HotelError:
        await websocket.close(code=CLOSE_NOT_FOUND)
        return None
    if not await rooms.can_access(room, user.id, user.is_admin):
        await websocket.close(code=CLOSE_FORBIDDEN)
        return None
    return user


async def _pump(websocket: WebSocket, channel: RealtimeChannel) -> None:
    while True:
        payload = await channel.queue.get()
        if payload is None:
            return
        await websocket.send_json(payload)
        if channel.close_code is not None and channel.queue.empty():
            return


async def _listen(websocket: WebSocket) -> None:
    while True:
        raw = await websocket.receive_text()
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            message = {}
        if isinstance(message, dict) and message.get("type") == "ping":
            await websocket.send_json({"type": "pong"})


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket, session: DBSession) -> None:
    if request_tracker.is_shutting_down:
        await session.close()
        await websocket.close(code=CLOSE_SERVICE_RESTART)
        return

    token = websocket.query_params.get("token")
    room_id = websocket.query_params.get("room_id")

    user = await _authorize(websocket, session, token, room_id)
    # The socket may stay open for hours; do not hold a pooled connection meanwhile
    await session.close()
    if user is None or token is None:
        return

    settings = get_settings()
    channel_id = room_id or settings.hall_room_id
    channel = RealtimeChannel(websocket.app.state.notifier, user.id)
    channel.watch_session(hash_token(token))
    channel.follow("messages", {"room_id": channel_id})
    if channel_id == settings.hall_room_id:
        channel.follow("hall_participants")
    else:
        channel.follow("visit_requests", {"room_id": channel_id})
        channel.follow("room_participants", {"room_id": channel_id})
        channel.watch_room(channel_id)

    await websocket.accept()
    logger.info("Realtime socket opened", user_id=str(user.id), channel=channel_id)

    tasks = [
        asyncio.create_task(_pump(websocket, channel)),
        asyncio.create_task(_listen(websocket)),
    ]
    async with request_tracker.track_socket():
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                exc = task.exception()
                if exc is not None and not isinstance(exc, WebSocketDisconnect):
                    logger.warning("Realtime socket failed", error=str(exc))
            if channel.close_code is not None and tasks[0] in done:
                tasks[1].cancel()
                await websocket.close(code=channel.close_code)
        finally:
            channel.close()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(
                "Realtime socket closed",
                user_id=str(user.id),
                channel=channel_id,
                close_code=channel.close_code,
            )
