"""Tests for the error taxonomy and its HTTP mapping."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from src.hotel.core.exceptions import (
    AlreadyMemberError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DependencyError,
    DuplicateRequestError,
    HotelError,
    NotFoundError,
    ValidationError,
    setup_exception_handlers,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("error", "kind", "status_code"),
    [
        (ValidationError, "validation_error", 400),
        (AuthenticationError, "authentication_error", 401),
        (AuthorizationError, "authorization_error", 403),
        (NotFoundError, "not_found", 404),
        (ConflictError, "conflict_error", 409),
        (DuplicateRequestError, "duplicate_request", 409),
        (AlreadyMemberError, "already_member", 409),
        (DependencyError, "dependency_error", 503),
    ],
)
def test_error_kinds(error: type[HotelError], kind: str, status_code: int):
    exc = error("something happened")
    assert exc.kind == kind
    assert exc.status_code == status_code
    assert exc.to_dict() == {"kind": kind, "detail": "something happened"}


def test_context_is_included_when_given():
    exc = DependencyError("failed", room_id="room_1", failed_step="messages")
    assert exc.to_dict()["context"] == {"room_id": "room_1", "failed_step": "messages"}


class Payload(BaseModel):
    count: int


def build_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/conflict")
    async def conflict() -> None:
        raise DuplicateRequestError("A visit request is already pending", room_id="room_1")

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("secret internals")

    @app.post("/payload")
    async def payload(data: Payload) -> dict[str, int]:
        return {"count": data.count}

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_domain_error_body(client: AsyncClient):
    response = await client.get("/conflict")

    assert response.status_code == 409
    body = response.json()
    assert body["kind"] == "duplicate_request"
    assert body["detail"] == "A visit request is already pending"
    assert body["context"] == {"room_id": "room_1"}
    assert "request_id" in body


async def test_unhandled_error_hides_details(client: AsyncClient):
    response = await client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["kind"] == "internal_error"
    assert "secret" not in body["detail"]


async def test_request_validation_body(client: AsyncClient):
    response = await client.post("/payload", json={"count": "many"})

    assert response.status_code == 422
    body = response.json()
    assert body["kind"] == "validation_error"
    assert body["context"]["errors"][0]["loc"] == ["body", "count"]


async def test_unknown_route_uses_http_error_kind(client: AsyncClient):
    response = await client.get("/missing")

    assert response.status_code == 404
    assert response.json()["kind"] == "http_error"
