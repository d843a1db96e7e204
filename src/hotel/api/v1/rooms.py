"""Room registry endpoints."""

from fastapi import APIRouter, Response, status

from src.hotel.api.dependencies import CurrentUser, HostUser, RoomServiceDep, VisitServiceDep
from src.hotel.core.exceptions import AuthorizationError
from src.hotel.models import Room, User
from src.hotel.schemas.room import ParticipantRead, RoomCreate, RoomRead
from src.hotel.schemas.visit import VisitRequestCreate, VisitRequestRead

router = APIRouter(prefix="/rooms", tags=["rooms"])


def ensure_owner(room: Room, user: User) -> None:
    if room.host_id != user.id and not user.is_admin:
        raise AuthorizationError("Only the room's host can do this", room_id=room.id)


@router.get("", response_model=list[RoomRead])
async def list_available_rooms(_user: CurrentUser, service: RoomServiceDep) -> list[RoomRead]:
    """Active rooms, newest first."""
    rooms = await service.list_available_rooms()
    return [RoomRead.model_validate(r) for r in rooms]


@router.post(
    "",
    response_model=RoomRead,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Only hosts and admins can open rooms"}},
)
async def create_room(data: RoomCreate, user: HostUser, service: RoomServiceDep) -> RoomRead:
    room = await service.create_room(
        user.id, user.display_name, name=data.name, requires_approval=data.requires_approval
    )
    return RoomRead.model_validate(room)


@router.get("/{room_id}", response_model=RoomRead, responses={404: {"description": "No such room"}})
async def get_room(room_id: str, _user: CurrentUser, service: RoomServiceDep) -> RoomRead:
    return RoomRead.model_validate(await service.get_room(room_id))


@router.get("/{room_id}/participants", response_model=list[ParticipantRead])
async def list_participants(
    room_id: str, user: CurrentUser, service: RoomServiceDep
) -> list[ParticipantRead]:
    room = await service.get_room(room_id)
    if not await service.can_access(room, user.id, user.is_admin):
        raise AuthorizationError("Not a member of this room", room_id=room_id)
    participants = await service.list_participants(room_id)
    return [ParticipantRead.model_validate(p) for p in participants]


@router.post("/{room_id}/deactivate", response_model=RoomRead)
async def deactivate_room(room_id: str, user: CurrentUser, service: RoomServiceDep) -> RoomRead:
    ensure_owner(await service.get_room(room_id), user)
    return RoomRead.model_validate(await service.deactivate_room(room_id))


@router.delete(
    "/{room_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={503: {"description": "Deletion stopped part-way; body names the failed step"}},
)
async def delete_room(room_id: str, user: CurrentUser, service: RoomServiceDep) -> Response:
    ensure_owner(await service.get_room(room_id), user)
    await service.delete_room(room_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{room_id}/visit-requests",
    response_model=VisitRequestRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Room missing or inactive"},
        409: {"description": "Already a member, or a request is already pending"},
    },
)
async def request_visit(
    room_id: str,
    data: VisitRequestCreate,
    user: CurrentUser,
    service: VisitServiceDep,
) -> VisitRequestRead:
    request = await service.request_visit(room_id, user.id, user.display_name, data.note)
    return VisitRequestRead.model_validate(request)
