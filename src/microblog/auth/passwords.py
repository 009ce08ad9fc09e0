"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

from microblog.core.config import get_settings


# bcrypt only looks at the first 72 bytes of its input.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


def hash_password(password: str, *, rounds: int | None = None) -> str:
    """Hash a plaintext password.

    Args:
        password: The plaintext password.
        rounds: bcrypt cost factor. Defaults to ``auth.bcrypt_rounds``.

    Returns:
        The bcrypt hash as text, suitable for ``users.password_digest``.

    Raises:
        ValueError: If the password is longer than 72 bytes once encoded.
    """
    encoded = _encode(password)
    if len(encoded) > BCRYPT_MAX_BYTES:
        msg = f"Password exceeds {BCRYPT_MAX_BYTES} bytes"
        raise ValueError(msg)
    if rounds is None:
        rounds = get_settings().auth.bcrypt_rounds
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_digest: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    encoded = _encode(password)
    # Never stored, so it cannot match
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_digest.encode())
    except ValueError:
        # Malformed digest
        return False
