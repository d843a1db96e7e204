"""Rooms, visit requests and chat over HTTP."""

import pytest
from httpx import AsyncClient

from src.hotel.models import User

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def test_guest_cannot_open_a_room(client: AsyncClient, guest: User, login):
    response = await client.post("/api/v1/rooms", headers=await login(guest), json={})

    assert response.status_code == 403
    assert response.json()["kind"] == "authorization_error"


async def test_visit_flow(client: AsyncClient, host: User, guest: User, login):
    host_headers = await login(host)
    guest_headers = await login(guest)

    created = await client.post(
        "/api/v1/rooms", headers=host_headers, json={"name": "Penthouse"}
    )
    assert created.status_code == 201
    room_id = created.json()["id"]

    listing = await client.get("/api/v1/rooms", headers=guest_headers)
    assert [r["id"] for r in listing.json()] == [room_id]

    # Not a member yet
    forbidden = await client.get(f"/api/v1/rooms/{room_id}/messages", headers=guest_headers)
    assert forbidden.status_code == 403

    requested = await client.post(
        f"/api/v1/rooms/{room_id}/visit-requests", headers=guest_headers, json={"note": "Hi!"}
    )
    assert requested.status_code == 201
    request_id = requested.json()["id"]

    duplicate = await client.post(
        f"/api/v1/rooms/{room_id}/visit-requests", headers=guest_headers, json={}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["kind"] == "duplicate_request"

    mine = await client.get("/api/v1/users/me/visit-requests", headers=guest_headers)
    assert [r["id"] for r in mine.json()] == [request_id]

    pending = await client.get("/api/v1/visit-requests/pending", headers=host_headers)
    assert pending.json()[0]["room_name"] == "Penthouse"
    assert [r["id"] for r in pending.json()[0]["requests"]] == [request_id]

    # Only the host may answer
    self_approve = await client.post(
        f"/api/v1/visit-requests/{request_id}/respond",
        headers=guest_headers,
        json={"decision": "approved"},
    )
    assert self_approve.status_code == 403

    invalid = await client.post(
        f"/api/v1/visit-requests/{request_id}/respond",
        headers=host_headers,
        json={"decision": "maybe"},
    )
    assert invalid.status_code == 400
    assert invalid.json()["kind"] == "validation_error"

    approved = await client.post(
        f"/api/v1/visit-requests/{request_id}/respond",
        headers=host_headers,
        json={"decision": "approved"},
    )
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"

    again = await client.post(
        f"/api/v1/visit-requests/{request_id}/respond",
        headers=host_headers,
        json={"decision": "rejected"},
    )
    assert again.status_code == 409

    my_rooms = await client.get("/api/v1/users/me/rooms", headers=guest_headers)
    assert [r["id"] for r in my_rooms.json()] == [room_id]

    sent = await client.post(
        f"/api/v1/rooms/{room_id}/messages", headers=guest_headers, json={"text": "Thanks!"}
    )
    assert sent.status_code == 201

    messages = await client.get(f"/api/v1/rooms/{room_id}/messages", headers=host_headers)
    assert [m["text"] for m in messages.json()] == ["Thanks!"]

    participants = await client.get(f"/api/v1/rooms/{room_id}/participants", headers=guest_headers)
    assert {p["user_id"] for p in participants.json()} == {str(host.id), str(guest.id)}


async def test_unknown_room(client: AsyncClient, guest: User, login):
    response = await client.get("/api/v1/rooms/room_missing", headers=await login(guest))

    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


async def test_only_host_deletes_room(client: AsyncClient, host: User, guest: User, login):
    host_headers = await login(host)
    room_id = (await client.post("/api/v1/rooms", headers=host_headers, json={})).json()["id"]

    denied = await client.delete(f"/api/v1/rooms/{room_id}", headers=await login(guest))
    assert denied.status_code == 403

    deleted = await client.delete(f"/api/v1/rooms/{room_id}", headers=host_headers)
    assert deleted.status_code == 204

    gone = await client.get(f"/api/v1/rooms/{room_id}", headers=host_headers)
    assert gone.status_code == 404


async def test_hall_chat_and_presence(client: AsyncClient, guest: User, login):
    headers = await login(guest)

    joined = await client.post("/api/v1/hall/join", headers=headers)
    assert joined.status_code == 200
    online = await client.get("/api/v1/hall/participants", headers=headers)
    assert [p["user_id"] for p in online.json()] == [str(guest.id)]

    sent = await client.post("/api/v1/hall/messages", headers=headers, json={"text": "hello"})
    assert sent.status_code == 201
    empty = await client.post("/api/v1/hall/messages", headers=headers, json={"text": "  "})
    assert empty.status_code == 400

    hall = await client.get("/api/v1/hall/messages", headers=headers)
    assert [m["text"] for m in hall.json()] == ["hello"]

    deleted = await client.delete(f"/api/v1/messages/{sent.json()['id']}", headers=headers)
    assert deleted.json()["is_deleted"] is True

    left = await client.post("/api/v1/hall/leave", headers=headers)
    assert left.status_code == 204
    assert (await client.get("/api/v1/hall/participants", headers=headers)).json() == []
