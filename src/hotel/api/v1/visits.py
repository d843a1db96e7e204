"""Visit request endpoints for hosts."""

from uuid import UUID

from fastapi import APIRouter

from src.hotel.api.dependencies import CurrentUser, RoomServiceDep, VisitServiceDep
from src.hotel.api.v1.rooms import ensure_owner
from src.hotel.core.config import get_settings
from src.hotel.core.logging import get_logger
from src.hotel.schemas.visit import (
    PendingGroupRead,
    VisitDecision,
    VisitRequestRead,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/visit-requests", tags=["visits"])


@router.get("/pending", response_model=list[PendingGroupRead])
async def list_pending_for_host(
    user: CurrentUser, service: VisitServiceDep
) -> list[PendingGroupRead]:
    """Pending requests on the caller's rooms, grouped by room."""
    groups = await service.list_pending_for_host(user.id)
    return [
        PendingGroupRead(
            room_id=g.room_id,
            room_name=g.room_name,
            requests=[VisitRequestRead.model_validate(r) for r in g.requests],
        )
        for g in groups
    ]


@router.post(
    "/{request_id}/respond",
    response_model=VisitRequestRead,
    responses={
        400: {"description": "Decision is not 'approved' or 'rejected'"},
        403: {"description": "Caller does not host the room"},
        404: {"description": "No such request"},
        409: {"description": "Request already answered"},
    },
)
async def respond_to_request(
    request_id: UUID,
    data: VisitDecision,
    user: CurrentUser,
    visits: VisitServiceDep,
    rooms: RoomServiceDep,
) -> VisitRequestRead:
    """Approve or reject a visit request.

    Only the room's host or an admin may answer, unless
    ENFORCE_HOST_APPROVAL is switched off.
    """
    if get_settings().enforce_host_approval:
        visit = await visits.get_request(request_id)
        ensure_owner(await rooms.get_room(visit.room_id), user)
    else:
        logger.warning("Host check disabled for visit response", request_id=str(request_id))

    request = await visits.respond_to_request(request_id, data.decision)
    return VisitRequestRead.model_validate(request)
