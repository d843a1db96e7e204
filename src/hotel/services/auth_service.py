"""Authentication service - login, persisted sessions, logout, registration."""

import hmac
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.hotel.core.cache import blacklist_session, is_session_blacklisted
from src.hotel.core.exceptions import AuthenticationError, ConflictError
from src.hotel.core.logging import get_logger
from src.hotel.core.realtime import ChangeKind, ChangeNotifier
from src.hotel.core.security import (
    DUMMY_PASSWORD_HASH,
    SESSION_TOKEN_TYPE,
    create_session_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.hotel.models import User, UserRole, UserSession
from src.hotel.models.base import utc_now
from src.hotel.repositories import UserRepository, UserSessionRepository
from src.hotel.services.base import revoked_sessions_row, storage_errors

logger = get_logger(__name__)


@dataclass
class LoginResult:
    user: User
    token: str
    expires_at: datetime


class AuthService:
    """Username/password login backed by a persisted, revocable session.

    The session token is a signed JWT; the user_sessions row holding its
    hash is the source of truth for revocation, and the Redis blacklist is
    only a fast path in front of it.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: UserSessionRepository,
        session: AsyncSession,
        notifier: ChangeNotifier,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.session = session
        self.notifier = notifier

    async def login(self, username: str, password: str) -> LoginResult:
        """Authenticate and open a new session.

        Raises:
            AuthenticationError: Unknown user, wrong password or inactive account
        """
        async with storage_errors(self.session, "login"):
            user = await self.user_repo.get_by_username(username)

            # Always verify so unknown usernames cost the same as wrong passwords
            password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
            password_valid = verify_password(password, password_hash)

            if user is None or not password_valid or not user.is_active:
                logger.info("Login failed", reason="invalid_credentials")
                raise AuthenticationError("Invalid username or password")

            token, expires_at = create_session_token(user.id, user.display_name, user.role)
            self.session_repo.add(
                UserSession(user_id=user.id, token_hash=hash_token(token), expires_at=expires_at)
            )
            user.last_login_at = utc_now()
            self.user_repo.add(user)
            await self.session.commit()

        logger.info("Login succeeded", user_id=str(user.id), role=user.role)
        return LoginResult(user=user, token=token, expires_at=expires_at)

    async def restore_session(self, token: str) -> User:
        """Resolve a session token to its active user.

        Raises:
            AuthenticationError: Token invalid, expired, revoked, or user inactive
        """
        payload = decode_token(token)
        if payload is None or payload.get("type") != SESSION_TOKEN_TYPE:
            raise AuthenticationError("Invalid or expired session")

        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as e:
            raise AuthenticationError("Invalid session payload") from e

        token_hash = hash_token(token)
        if await is_session_blacklisted(token_hash) is True:
            raise AuthenticationError("Session has been revoked")

        async with storage_errors(self.session, "restore_session"):
            user_session = await self.session_repo.get_valid_by_hash(token_hash)
            if user_session is None or not hmac.compare_digest(
                token_hash, user_session.token_hash
            ):
                raise AuthenticationError("Session has been revoked")
            if user_session.user_id != user_id:
                raise AuthenticationError("Invalid session payload")

            user = await self.user_repo.get_by_id(user_id)

        if user is None or not user.is_active:
            raise AuthenticationError("User not found or inactive")
        return user

    async def logout(self, token: str) -> bool:
        """Revoke a session. Returns False if the token was never issued."""
        token_hash = hash_token(token)
        async with storage_errors(self.session, "logout"):
            user_session = await self.session_repo.get_by_hash(token_hash)
            if user_session is None:
                return False
            await self.session_repo.revoke(user_session)
            await self.session.commit()

        # Database is already authoritative; Redis only speeds up rejection
        ttl = int((user_session.expires_at - utc_now()).total_seconds())
        try:
            await blacklist_session(token_hash, ttl)
        except Exception as e:
            logger.warning("Failed to blacklist session in Redis", error=str(e))

        logger.info("Logged out", user_id=str(user_session.user_id))
        # Open realtime sockets of this session close on this event
        await self.notifier.publish(
            "user_sessions",
            ChangeKind.UPDATE,
            revoked_sessions_row(user_session.user_id, token_hash),
        )
        return True

    async def register(
        self,
        username: str,
        display_name: str,
        password: str,
        role: UserRole = UserRole.GUEST,
    ) -> User:
        """Create an account.

        Raises:
            ConflictError: Username already taken
        """
        async with storage_errors(self.session, "register"):
            if await self.user_repo.exists_by_username(username):
                raise ConflictError("Username is already taken", username=username)

            user = User(
                username=username.strip().lower(),
                display_name=display_name.strip(),
                hashed_password=hash_password(password),
                role=role.value,
            )
            self.user_repo.add(user)
            await self.session.commit()

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return user

    async def ensure_admin(self, username: str, password: str, display_name: str) -> User | None:
        """Create the configured admin account on first start. No-op if it exists."""
        async with storage_errors(self.session, "ensure_admin"):
            if await self.user_repo.exists_by_username(username):
                return None
        user = await self.register(username, display_name, password, role=UserRole.ADMIN)
        logger.info("Seeded admin account", user_id=str(user.id))
        return user
