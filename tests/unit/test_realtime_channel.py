"""Tests for the per-socket realtime channel buffer."""

from uuid import uuid4

import pytest

from src.hotel.api.v1.realtime import (
    CLOSE_ROOM_CLOSED,
    CLOSE_UNAUTHORIZED,
    QUEUE_SIZE,
    RealtimeChannel,
)
from src.hotel.core.realtime import ChangeKind, ChangeNotifier

pytestmark = pytest.mark.unit


async def test_events_are_queued_with_own_flag(notifier: ChangeNotifier):
    me, other = uuid4(), uuid4()
    channel = RealtimeChannel(notifier, me)
    channel.follow("messages", {"room_id": "hall"})

    await notifier.publish("messages", ChangeKind.INSERT, {"room_id": "hall", "sender_id": str(me)})
    await notifier.publish(
        "messages", ChangeKind.INSERT, {"room_id": "hall", "sender_id": str(other)}
    )

    first, second = channel.queue.get_nowait(), channel.queue.get_nowait()
    assert first["type"] == "change"
    assert first["table"] == "messages"
    assert first["kind"] == "insert"
    assert first["own"] is True
    assert second["own"] is False


async def test_full_queue_drops_events(notifier: ChangeNotifier):
    channel = RealtimeChannel(notifier, uuid4())
    channel.follow("rooms")

    for n in range(QUEUE_SIZE + 5):
        await notifier.publish("rooms", ChangeKind.INSERT, {"id": f"room_{n}"})

    assert channel.queue.qsize() == QUEUE_SIZE
    assert channel.queue.get_nowait()["row"]["id"] == "room_0"


async def test_close_cancels_subscriptions(notifier: ChangeNotifier):
    channel = RealtimeChannel(notifier, uuid4())
    channel.follow("messages", {"room_id": "room_1"})
    channel.follow("visit_requests", {"room_id": "room_1"})

    channel.close()
    await notifier.publish("messages", ChangeKind.INSERT, {"room_id": "room_1"})

    assert notifier.subscriber_count() == 0
    assert channel.queue.empty()


def _revoked(user_id, token_hash=None) -> dict:
    return {"user_id": str(user_id), "token_hash": token_hash, "revoked": True}


async def test_revoking_this_session_ends_the_channel(notifier: ChangeNotifier):
    me = uuid4()
    channel = RealtimeChannel(notifier, me)
    channel.watch_session("hash-of-this-tab")
    channel.follow("messages", {"room_id": "hall"})

    await notifier.publish("user_sessions", ChangeKind.UPDATE, _revoked(me, "hash-of-other-tab"))
    assert channel.close_code is None

    await notifier.publish("user_sessions", ChangeKind.UPDATE, _revoked(me, "hash-of-this-tab"))
    await notifier.publish("messages", ChangeKind.INSERT, {"room_id": "hall", "text": "late"})

    assert channel.close_code == CLOSE_UNAUTHORIZED
    assert channel.queue.get_nowait() is None
    assert channel.queue.empty()
    assert notifier.subscriber_count() == 0


@pytest.mark.parametrize("kind", [ChangeKind.UPDATE, ChangeKind.DELETE])
async def test_revoking_every_session_of_the_user_ends_the_channel(
    notifier: ChangeNotifier, kind: ChangeKind
):
    me = uuid4()
    channel = RealtimeChannel(notifier, me)
    channel.watch_session("hash-of-this-tab")

    await notifier.publish("user_sessions", kind, _revoked(uuid4()))
    assert channel.close_code is None

    await notifier.publish("user_sessions", kind, _revoked(me))
    assert channel.close_code == CLOSE_UNAUTHORIZED


async def test_closed_room_is_forwarded_then_ends_the_channel(notifier: ChangeNotifier):
    channel = RealtimeChannel(notifier, uuid4())
    channel.watch_room("room_1")

    await notifier.publish("rooms", ChangeKind.UPDATE, {"id": "room_1", "is_active": True})
    assert channel.close_code is None

    await notifier.publish("rooms", ChangeKind.DELETE, {"id": "room_1", "is_active": True})

    assert channel.close_code == CLOSE_ROOM_CLOSED
    renamed, deleted = channel.queue.get_nowait(), channel.queue.get_nowait()
    assert renamed["kind"] == "update"
    assert deleted["kind"] == "delete"
    assert channel.queue.get_nowait() is None


async def test_deactivated_room_ends_the_channel(notifier: ChangeNotifier):
    channel = RealtimeChannel(notifier, uuid4())
    channel.watch_room("room_1")

    await notifier.publish("rooms", ChangeKind.UPDATE, {"id": "room_1", "is_active": False})

    assert channel.close_code == CLOSE_ROOM_CLOSED
