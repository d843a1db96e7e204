"""Error taxonomy and exception handlers with request_id in responses.

Services raise HotelError subclasses; the handlers below turn them into a
structured body ``{"kind", "detail", "request_id"}`` so the client always
gets a kind it can branch on plus a human-readable message.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.hotel.core.logging import get_logger

logger = get_logger(__name__)


class HotelError(Exception):
    """Base class for all domain errors."""

    kind = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"kind": self.kind, "detail": self.message}
        if self.detail:
            body["context"] = self.detail
        return body


class ValidationError(HotelError):
    """A required field is missing or a value is out of range."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(HotelError):
    """Bad credentials, inactive account, or an invalid session."""

    kind = "authentication_error"
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(HotelError):
    """Authenticated, but the role or ownership does not allow the action."""

    kind = "authorization_error"
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(HotelError):
    kind = "conflict_error"
    status_code = status.HTTP_409_CONFLICT


class DuplicateRequestError(ConflictError):
    """A pending visit request already exists for this room and user."""

    kind = "duplicate_request"


class AlreadyMemberError(HotelError):
    kind = "already_member"
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(HotelError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class DependencyError(HotelError):
    """The storage or notification collaborator failed (network, quota, permission)."""

    kind = "dependency_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(HotelError)
    async def hotel_error_handler(request: Request, exc: HotelError) -> JSONResponse:
        request_id = correlation_id.get()
        if isinstance(exc, DependencyError):
            logger.error(
                "Dependency failure",
                kind=exc.kind,
                error=exc.message,
                request_id=request_id,
                path=request.url.path,
                **exc.detail,
            )
        else:
            logger.info(
                "Request rejected",
                kind=exc.kind,
                error=exc.message,
                path=request.url.path,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={**exc.to_dict(), "request_id": request_id},
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": "http_error",
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "kind": "http_error",
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "kind": "validation_error",
                "detail": "Request validation failed",
                "context": {"errors": jsonable_encoder(exc.errors())},
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "kind": "internal_error",
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
