"""Remember tokens.

The client keeps the plaintext token in a cookie; only its digest is stored.
"""

from __future__ import annotations

import hashlib
import secrets


REMEMBER_TOKEN_BYTES = 16


def new_remember_token() -> str:
    """Generate a random url-safe token (16 random bytes, base64)."""
    return secrets.token_urlsafe(REMEMBER_TOKEN_BYTES)


def digest(token: str) -> str:
    """SHA-1 hex digest of a remember token."""
    return hashlib.sha1(token.encode("utf-8")).hexdigest()  # noqa: S324
