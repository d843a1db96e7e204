"""Chat endpoints for rooms and for the Hall."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.hotel.api.dependencies import ChatServiceDep, CurrentUser, RoomServiceDep
from src.hotel.core.config import get_settings
from src.hotel.core.exceptions import AuthorizationError
from src.hotel.models import User
from src.hotel.schemas.message import MessageCreate, MessageRead
from src.hotel.services import RoomService

router = APIRouter(tags=["messages"])

MessageLimit = Annotated[int | None, Query(ge=1, le=500, description="Latest N messages")]


async def ensure_room_access(rooms: RoomService, room_id: str, user: User) -> None:
    room = await rooms.get_room(room_id)
    if not await rooms.can_access(room, user.id, user.is_admin):
        raise AuthorizationError("Not a member of this room", room_id=room_id)


@router.get("/hall/messages", response_model=list[MessageRead])
async def get_hall_messages(
    _user: CurrentUser, chat: ChatServiceDep, limit: MessageLimit = None
) -> list[MessageRead]:
    messages = await chat.get_messages(get_settings().hall_room_id, limit)
    return [MessageRead.model_validate(m) for m in messages]


@router.post("/hall/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def send_hall_message(
    data: MessageCreate, user: CurrentUser, chat: ChatServiceDep
) -> MessageRead:
    message = await chat.send_message(
        get_settings().hall_room_id, user.id, user.display_name, data.text, data.image_ref
    )
    return MessageRead.model_validate(message)


@router.get(
    "/rooms/{room_id}/messages",
    response_model=list[MessageRead],
    responses={403: {"description": "Not a member of this room"}},
)
async def get_room_messages(
    room_id: str,
    user: CurrentUser,
    chat: ChatServiceDep,
    rooms: RoomServiceDep,
    limit: MessageLimit = None,
) -> list[MessageRead]:
    await ensure_room_access(rooms, room_id, user)
    messages = await chat.get_messages(room_id, limit)
    return [MessageRead.model_validate(m) for m in messages]


@router.post(
    "/rooms/{room_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty or oversized message"},
        403: {"description": "Not a member of this room"},
        404: {"description": "Room missing or inactive"},
    },
)
async def send_room_message(
    room_id: str,
    data: MessageCreate,
    user: CurrentUser,
    chat: ChatServiceDep,
    rooms: RoomServiceDep,
) -> MessageRead:
    await ensure_room_access(rooms, room_id, user)
    message = await chat.send_message(
        room_id, user.id, user.display_name, data.text, data.image_ref
    )
    return MessageRead.model_validate(message)


@router.delete("/messages/{message_id}", response_model=MessageRead)
async def delete_message(
    message_id: UUID, user: CurrentUser, chat: ChatServiceDep
) -> MessageRead:
    """Soft-delete a message (sender or admin)."""
    message = await chat.delete_message(message_id, user.id, user.is_admin)
    return MessageRead.model_validate(message)
