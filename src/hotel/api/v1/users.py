"""Current-user endpoints: profile, my rooms, my pending requests."""

from fastapi import APIRouter

from src.hotel.api.dependencies import (
    CurrentUser,
    RoomServiceDep,
    UserServiceDep,
    VisitServiceDep,
)
from src.hotel.schemas.room import RoomRead
from src.hotel.schemas.user import ProfileUpdate, UserRead
from src.hotel.schemas.visit import VisitRequestRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_me(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch(
    "/me",
    response_model=UserRead,
    responses={
        400: {"description": "Empty display name or avatar too large"},
        401: {"description": "Not authenticated"},
    },
)
async def update_me(
    data: ProfileUpdate,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> UserRead:
    user = await service.update_profile(
        current_user,
        display_name=data.display_name,
        avatar_ref=data.avatar_ref,
        password=data.password,
    )
    return UserRead.model_validate(user)


@router.get("/me/rooms", response_model=list[RoomRead])
async def my_rooms(current_user: CurrentUser, service: RoomServiceDep) -> list[RoomRead]:
    """Rooms the caller hosts or has been admitted to."""
    rooms = await service.get_user_rooms(current_user.id)
    return [RoomRead.model_validate(r) for r in rooms]


@router.get("/me/visit-requests", response_model=list[VisitRequestRead])
async def my_pending_requests(
    current_user: CurrentUser, service: VisitServiceDep
) -> list[VisitRequestRead]:
    requests = await service.list_pending_for_user(current_user.id)
    return [VisitRequestRead.model_validate(r) for r in requests]
