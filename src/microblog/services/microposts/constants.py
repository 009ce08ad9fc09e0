"""Constants for microposts."""

from __future__ import annotations

from typing import Final


CONTENT_MAX_LENGTH: Final[int] = 140
