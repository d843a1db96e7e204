"""Security utilities - crypto and response headers.

Re-exports all security-related functions for convenience.
"""

from src.hotel.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    SESSION_TOKEN_TYPE,
    create_session_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.hotel.core.security.headers import SecurityHeadersMiddleware

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "SESSION_TOKEN_TYPE",
    "create_session_token",
    "decode_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
]
