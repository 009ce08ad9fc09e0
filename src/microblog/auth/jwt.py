"""JWT access token handling.

Tokens are signed with HS256 by default using ``JWT_SECRET_KEY``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel

from microblog.core.config import get_settings
from microblog.observability.logging import get_logger


logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"


class TokenPayload(BaseModel):
    """JWT token payload model."""

    sub: str  # Subject (user ID)
    exp: datetime
    iat: datetime
    type: str = ACCESS_TOKEN_TYPE
    roles: list[str] = []


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is invalid."""


def create_access_token(
    subject: str,
    *,
    roles: list[str] | None = None,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a new JWT access token.

    Args:
        subject: The subject of the token (the user ID).
        roles: User roles.
        expires_delta: Custom expiration time. If None, uses default from settings.
        extra_claims: Additional claims to include in the token.

    Returns:
        Encoded JWT token string.
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(
            minutes=settings.auth.jwt.access_token_expire_minutes
        )

    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": subject,
        "exp": now + expires_delta,
        "iat": now,
        "type": ACCESS_TOKEN_TYPE,
        "roles": roles or [],
    }

    if extra_claims:
        payload.update(extra_claims)

    return jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str) -> TokenPayload:
    """Decode and validate an access token.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid or not an access token.
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
    except ExpiredSignatureError as e:
        logger.debug("Token expired", error=str(e))
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e
    except JWTError as e:
        logger.warning("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        msg = f"Invalid token type. Expected {ACCESS_TOKEN_TYPE}, got {payload.get('type')}"
        raise TokenInvalidError(msg)

    return TokenPayload(**payload)
