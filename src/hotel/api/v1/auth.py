"""Authentication endpoints - login, session restore, logout, registration."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.hotel.api.dependencies import AuthServiceDep, CurrentUser, SessionToken
from src.hotel.core.config import get_settings
from src.hotel.core.rate_limit import limiter
from src.hotel.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, RegisterRequest
from src.hotel.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "Session opened",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "expires_at": "2024-01-22T10:30:00",
                        "user": {
                            "id": "550e8400-e29b-41d4-a716-446655440000",
                            "username": "alice",
                            "display_name": "Alice",
                            "role": "guest",
                            "is_active": True,
                            "avatar_ref": None,
                            "last_login_at": "2024-01-15T10:30:00",
                            "created_at": "2024-01-01T09:00:00",
                        },
                    }
                }
            },
        },
        401: {"description": "Invalid credentials or inactive account"},
    },
)
@limiter.limit(settings.login_rate_limit)
async def login(request: Request, data: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    """Log in with username (case-insensitive) and password."""
    result = await service.login(data.username, data.password)
    return LoginResponse(
        access_token=result.token,
        expires_at=result.expires_at,
        user=UserRead.model_validate(result.user),
    )


@router.get(
    "/session",
    response_model=UserRead,
    responses={401: {"description": "Session invalid, expired or revoked"}},
)
async def restore_session(current_user: CurrentUser) -> UserRead:
    """Return the user behind a previously issued session token."""
    return UserRead.model_validate(current_user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(token: SessionToken, service: AuthServiceDep) -> LogoutResponse:
    """Revoke the presented session token."""
    return LogoutResponse(revoked=await service.logout(token))


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"description": "Username already taken"},
        422: {"description": "Invalid username or weak password"},
    },
)
@limiter.limit(settings.register_rate_limit)
async def register(request: Request, data: RegisterRequest, service: AuthServiceDep) -> UserRead:
    """Create a guest account."""
    user = await service.register(data.username, data.display_name, data.password)
    return UserRead.model_validate(user)
