"""Cryptographic utilities - password hashing, session tokens, and token hashing."""

from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any
from uuid import UUID, uuid4

import argon2
from jose import JWTError, jwt

from src.hotel.core.config import get_settings

SESSION_TOKEN_TYPE = "session"


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error (fails closed)."""
    try:
        return _password_hasher.verify(hashed, password)
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.VerificationError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


# Verified against when the username is unknown so both paths cost the same
DUMMY_PASSWORD_HASH = hash_password("not-a-real-password-for-timing")


def create_session_token(
    subject: str | UUID,
    display_name: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create a signed session token. Returns (token, expiry as naive UTC datetime).

    The jti makes every token unique, even for two logins in the same second.
    """
    settings = get_settings()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(hours=settings.session_expire_hours)

    to_encode = {
        "sub": str(subject),
        "display_name": display_name,
        "role": role,
        "exp": expire,
        "type": SESSION_TOKEN_TYPE,
        "jti": str(uuid4()),
    }
    token: str = jwt.encode(  # type: ignore[assignment]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return token, expire.replace(tzinfo=None)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
