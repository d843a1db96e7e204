"""Authentication and role dependencies."""

from typing import Annotated

from fastapi import Depends, Header

from src.hotel.api.dependencies.services import AuthServiceDep
from src.hotel.core.exceptions import AuthenticationError, AuthorizationError
from src.hotel.core.logging import bind_user_context
from src.hotel.models import User, UserRole


def get_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing or invalid authorization header")
    return authorization[7:]


SessionToken = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(token: SessionToken, auth_service: AuthServiceDep) -> User:
    """Resolve the session token and bind the user to the log context."""
    user = await auth_service.restore_session(token)
    bind_user_context(user.id, user.role, user.username)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole):  # type: ignore[no-untyped-def]
    """Dependency factory rejecting users whose role is not listed."""
    allowed = {role.value for role in roles}

    async def check_role(user: CurrentUser) -> User:
        if user.role not in allowed:
            raise AuthorizationError("Insufficient role for this action", role=user.role)
        return user

    return check_role


AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
HostUser = Annotated[User, Depends(require_roles(UserRole.HOST, UserRole.ADMIN))]
