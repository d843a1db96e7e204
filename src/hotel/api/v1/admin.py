"""Admin panel endpoints (admin role only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.hotel.api.dependencies import (
    AdminServiceDep,
    AdminUser,
    InboxServiceDep,
    RoomServiceDep,
)
from src.hotel.schemas.admin import AdminUserCreate, AdminUserUpdate, DashboardStats
from src.hotel.schemas.inbox import InboxMessageRead
from src.hotel.schemas.message import MessageRead
from src.hotel.schemas.pagination import PaginatedResponse
from src.hotel.schemas.room import RoomRead
from src.hotel.schemas.user import UserRead

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Admin role required"},
    },
)

Cursor = Annotated[str | None, Query(description="Cursor for pagination")]
Limit = Annotated[int, Query(ge=1, le=100, description="Number of items per page")]


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(_admin: AdminUser, service: AdminServiceDep) -> DashboardStats:
    return await service.dashboard_stats()


@router.get("/activity", response_model=list[MessageRead])
async def recent_activity(
    _admin: AdminUser,
    service: AdminServiceDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> list[MessageRead]:
    """Latest messages across the Hall and all rooms."""
    return [MessageRead.model_validate(m) for m in await service.recent_activity(limit)]


@router.get("/users", response_model=PaginatedResponse[UserRead])
async def list_users(
    _admin: AdminUser,
    service: AdminServiceDep,
    q: Annotated[str | None, Query(max_length=50, description="Username or name filter")] = None,
    cursor: Cursor = None,
    limit: Limit = 50,
) -> PaginatedResponse[UserRead]:
    users, next_cursor, has_more = await service.list_users(q, cursor, limit)
    return PaginatedResponse(
        items=[UserRead.model_validate(u) for u in users],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: AdminUserCreate, _admin: AdminUser, service: AdminServiceDep
) -> UserRead:
    user = await service.create_user(data.username, data.display_name, data.password, data.role)
    return UserRead.model_validate(user)


@router.get("/users/{user_id}", response_model=UserRead)
async def get_user(user_id: UUID, _admin: AdminUser, service: AdminServiceDep) -> UserRead:
    return UserRead.model_validate(await service.get_user(user_id))


@router.patch("/users/{user_id}", response_model=UserRead)
async def update_user(
    user_id: UUID, data: AdminUserUpdate, _admin: AdminUser, service: AdminServiceDep
) -> UserRead:
    user = await service.update_user(
        user_id,
        display_name=data.display_name,
        role=data.role,
        is_active=data.is_active,
        password=data.password,
    )
    return UserRead.model_validate(user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, admin: AdminUser, service: AdminServiceDep) -> Response:
    await service.delete_user(user_id, actor_id=admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/rooms", response_model=list[RoomRead])
async def list_all_rooms(_admin: AdminUser, rooms: RoomServiceDep) -> list[RoomRead]:
    """Every room, including deactivated ones."""
    return [RoomRead.model_validate(r) for r in await rooms.get_all_rooms()]


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(room_id: str, _admin: AdminUser, rooms: RoomServiceDep) -> Response:
    await rooms.delete_room(room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/inbox", response_model=PaginatedResponse[InboxMessageRead])
async def list_inbox(
    _admin: AdminUser,
    inbox: InboxServiceDep,
    unread_only: bool = False,
    cursor: Cursor = None,
    limit: Limit = 50,
) -> PaginatedResponse[InboxMessageRead]:
    entries, next_cursor, has_more = await inbox.list_messages(cursor, limit, unread_only)
    return PaginatedResponse(
        items=[InboxMessageRead.model_validate(e) for e in entries],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post("/inbox/read-all", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_read(_admin: AdminUser, inbox: InboxServiceDep) -> Response:
    await inbox.mark_all_read()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/inbox/{message_id}/read", response_model=InboxMessageRead)
async def mark_read(
    message_id: UUID, _admin: AdminUser, inbox: InboxServiceDep
) -> InboxMessageRead:
    return InboxMessageRead.model_validate(await inbox.mark_read(message_id))


@router.delete("/inbox/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inbox_message(
    message_id: UUID, _admin: AdminUser, inbox: InboxServiceDep
) -> Response:
    await inbox.delete(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
