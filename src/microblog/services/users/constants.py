"""Constants for account validation."""

from __future__ import annotations

import re
from typing import Final


# =============================================================================
# Field Limits
# =============================================================================

NAME_MAX_LENGTH: Final[int] = 50
EMAIL_MAX_LENGTH: Final[int] = 255
PASSWORD_MIN_LENGTH: Final[int] = 6
PASSWORD_MAX_LENGTH: Final[int] = 72  # bytes, the bcrypt input limit


# =============================================================================
# Formats
# =============================================================================

VALID_EMAIL_REGEX: Final[re.Pattern[str]] = re.compile(
    r"\A[\w+\-.]+@[a-z\d\-]+(?:\.[a-z\d\-]+)*\.[a-z]+\Z",
    re.IGNORECASE | re.ASCII,
)


# =============================================================================
# Mass Assignment
# =============================================================================
# Only these attributes may be changed through a profile edit.

PERMITTED_UPDATE_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {"name", "email", "password", "password_confirmation"}
)
