"""Public "message to the admin" endpoint. No login required."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.hotel.api.dependencies import InboxServiceDep
from src.hotel.core.config import get_settings
from src.hotel.core.rate_limit import get_rate_limit_key, limiter
from src.hotel.schemas.inbox import InboxSubmit, InboxSubmitResponse

router = APIRouter(prefix="/inbox", tags=["inbox"])


@router.post(
    "",
    response_model=InboxSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Empty message"},
        429: {"description": "Too many messages from this address"},
    },
)
@limiter.limit(get_settings().inbox_rate_limit)
async def submit(
    request: Request, data: InboxSubmit, service: InboxServiceDep
) -> InboxSubmitResponse:
    entry = await service.submit(
        data.message,
        sender_name=data.sender_name,
        contact=data.contact,
        sender_ip=get_rate_limit_key(request),
    )
    return InboxSubmitResponse(id=entry.id)
