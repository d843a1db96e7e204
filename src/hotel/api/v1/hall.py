"""Hall presence endpoints."""

from fastapi import APIRouter, Response, status

from src.hotel.api.dependencies import CurrentUser, HallServiceDep
from src.hotel.schemas.hall import HallParticipantRead

router = APIRouter(prefix="/hall", tags=["hall"])


@router.post("/join", response_model=HallParticipantRead)
async def join_hall(user: CurrentUser, service: HallServiceDep) -> HallParticipantRead:
    participant = await service.join_hall(user.id, user.display_name)
    return HallParticipantRead.model_validate(participant)


@router.post("/leave", status_code=status.HTTP_204_NO_CONTENT)
async def leave_hall(user: CurrentUser, service: HallServiceDep) -> Response:
    await service.leave_hall(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/participants", response_model=list[HallParticipantRead])
async def list_online(_user: CurrentUser, service: HallServiceDep) -> list[HallParticipantRead]:
    return [HallParticipantRead.model_validate(p) for p in await service.list_online()]
