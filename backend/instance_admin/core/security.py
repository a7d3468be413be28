"""
Security utilities for password hashing and session token management.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from instance_admin.config import get_settings

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Malformed hashes count as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_session_token(
    session_id: str,
    user_id: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create the signed token stored in the session cookie.

    Args:
        session_id: Server-side session identifier
        user_id: Identifier of the authenticated user
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT string
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_expire_minutes)

    now = datetime.now(timezone.utc)
    payload = {
        "sid": session_id,
        "sub": user_id,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        payload,
        settings.session_secret_key,
        algorithm=settings.session_algorithm,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        JWTError: If the token is malformed, tampered with or expired
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.session_secret_key,
        algorithms=[settings.session_algorithm],
    )
    if not payload.get("sid") or not payload.get("sub"):
        raise JWTError("Session token is missing required claims")
    return payload


def mask_connection_string(connection_string: str) -> str:
    """Hide the password part of a MongoDB URI before it is logged."""
    scheme, sep, rest = connection_string.partition("://")
    if not sep or "@" not in rest:
        return connection_string
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"
