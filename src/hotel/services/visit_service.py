"""Visit request workflow - guests ask to enter a room, hosts answer."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.exceptions import (
    AlreadyMemberError,
    ConflictError,
    DependencyError,
    DuplicateRequestError,
    NotFoundError,
    ValidationError,
)
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.models import ParticipantRole, RoomParticipant, VisitRequest, VisitStatus
from src.hotel.models.base import utc_now
from src.hotel.repositories import ParticipantRepository, RoomRepository, VisitRequestRepository
from src.hotel.services.base import as_row, storage_errors

logger = get_logger(__name__)


@dataclass
class PendingGroup:
    """Pending requests of one room, newest first."""

    room_id: str
    room_name: str
    requests: list[VisitRequest] = field(default_factory=list)


class VisitService:
    """State machine: none -> pending -> approved | rejected.

    Answering a request trusts the caller to have checked that the
    responder hosts the room; the API layer does that check.
    """

    def __init__(
        self,
        visit_repo: VisitRequestRepository,
        room_repo: RoomRepository,
        participant_repo: ParticipantRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.visit_repo = visit_repo
        self.room_repo = room_repo
        self.participant_repo = participant_repo
        self.session = session
        self.notifier = notifier

    async def request_visit(
        self,
        room_id: str,
        user_id: UUID,
        user_name: str,
        note: str | None = None,
    ) -> VisitRequest:
        """Ask to join a room.

        Raises:
            NotFoundError: Room missing or inactive
            AlreadyMemberError: User hosts the room, is enrolled, or was approved
            DuplicateRequestError: A pending request already exists
        """
        async with storage_errors(self.session, "request_visit"):
            room = await self.room_repo.get_by_id(room_id)
            if room is None or not room.is_active:
                raise NotFoundError("Room not found", room_id=room_id)
            if room.host_id == user_id:
                raise AlreadyMemberError("Already a member of this room", room_id=room_id)
            await self._ensure_can_request(room_id, user_id)

            request = VisitRequest(
                room_id=room_id,
                user_id=user_id,
                user_name=user_name,
                note=(note or "").strip() or None,
            )
            auto_approved = not room.requires_approval
            if auto_approved:
                request.status = VisitStatus.APPROVED.value
                request.responded_at = utc_now()
                self.participant_repo.add(self._participant(request))
            self.visit_repo.add(request)
            try:
                await self.session.commit()
            except IntegrityError:
                # Another tab may have won the race between the check and the insert
                await self.session.rollback()
                await self._ensure_can_request(room_id, user_id)
                raise

        logger.info(
            "Visit requested",
            room_id=room_id,
            user_id=str(user_id),
            request_id=str(request.id),
            status=request.status,
        )
        await self.notifier.publish("visit_requests", ChangeKind.INSERT, as_row(request))
        return request

    async def respond_to_request(self, request_id: UUID, decision: str) -> VisitRequest:
        """Approve or reject a pending request.

        The status write is unconditional: two responders that both pass the
        pending check both succeed, and the stored status is whichever write
        committed last. Enrollment after approval is a separate step.

        Raises:
            ValidationError: Decision is not approved/rejected
            NotFoundError: Request does not exist
            ConflictError: Request already answered when read
        """
        if decision not in (VisitStatus.APPROVED.value, VisitStatus.REJECTED.value):
            raise ValidationError(
                "Decision must be 'approved' or 'rejected'", decision=str(decision)
            )
        status = VisitStatus(decision)

        async with storage_errors(self.session, "respond_to_request"):
            request = await self.visit_repo.get_by_id(request_id)
            if request is None:
                raise NotFoundError("Visit request not found", request_id=str(request_id))
            if request.status != VisitStatus.PENDING.value:
                raise ConflictError(
                    "Visit request was already answered",
                    request_id=str(request_id),
                    status=request.status,
                )

            updated = await self.visit_repo.set_status(request_id, status, utc_now())
            if not updated:
                raise NotFoundError("Visit request not found", request_id=str(request_id))
            await self.session.commit()
            await self.session.refresh(request)

        logger.info(
            "Visit request answered",
            request_id=str(request_id),
            room_id=request.room_id,
            user_id=str(request.user_id),
            decision=status.value,
        )
        await self.notifier.publish("visit_requests", ChangeKind.UPDATE, as_row(request))

        if status is VisitStatus.APPROVED:
            await self._enroll(request)
        return request

    async def _enroll(self, request: VisitRequest) -> None:
        """Add the approved visitor to the room, unless already there."""
        try:
            if await self.participant_repo.is_participant(request.room_id, request.user_id):
                return
            participant = self._participant(request)
            self.participant_repo.add(participant)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Enrollment after approval failed",
                request_id=str(request.id),
                room_id=request.room_id,
                error=str(e),
            )
            raise DependencyError(
                "Request approved but enrollment failed",
                request_id=str(request.id),
                room_id=request.room_id,
            ) from e

        await self.notifier.publish("room_participants", ChangeKind.INSERT, as_row(participant))

    async def _ensure_can_request(self, room_id: str, user_id: UUID) -> None:
        if await self.participant_repo.is_participant(room_id, user_id):
            raise AlreadyMemberError("Already a member of this room", room_id=room_id)

        latest = await self.visit_repo.get_latest(room_id, user_id)
        if latest is None:
            return
        if latest.status == VisitStatus.PENDING.value:
            raise DuplicateRequestError(
                "A visit request is already pending",
                room_id=room_id,
                request_id=str(latest.id),
            )
        if latest.status == VisitStatus.APPROVED.value:
            raise AlreadyMemberError("Already a member of this room", room_id=room_id)

    @staticmethod
    def _participant(request: VisitRequest) -> RoomParticipant:
        return RoomParticipant(
            room_id=request.room_id,
            user_id=request.user_id,
            user_name=request.user_name,
            role=ParticipantRole.GUEST.value,
        )

    async def list_pending_for_host(self, host_id: UUID) -> list[PendingGroup]:
        """Pending requests on the host's rooms, grouped by room."""
        async with storage_errors(self.session, "list_pending_for_host"):
            rows = await self.visit_repo.list_pending_for_host(host_id)

        groups: dict[str, PendingGroup] = {}
        for request, room in rows:
            group = groups.setdefault(room.id, PendingGroup(room_id=room.id, room_name=room.name))
            group.requests.append(request)
        return list(groups.values())

    async def list_pending_for_user(self, user_id: UUID) -> list[VisitRequest]:
        async with storage_errors(self.session, "list_pending_for_user"):
            return await self.visit_repo.list_pending_for_user(user_id)

    async def get_request(self, request_id: UUID) -> VisitRequest:
        async with storage_errors(self.session, "get_request"):
            request = await self.visit_repo.get_by_id(request_id)
        if request is None:
            raise NotFoundError("Visit request not found", request_id=str(request_id))
        return request
