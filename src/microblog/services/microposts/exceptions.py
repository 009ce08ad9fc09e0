"""Exceptions for the micropost service."""

from __future__ import annotations

from microblog.core.exceptions import (
    ErrorDetail,
    NotFoundException,
    UnprocessableEntityException,
)


class MicropostNotFoundError(NotFoundException):
    """Raised when a micropost does not exist or belongs to someone else.

    The two cases share one error so other users' post ids are not probed.
    """

    def __init__(self, micropost_id: int) -> None:
        super().__init__("Micropost", micropost_id)


class MicropostValidationError(UnprocessableEntityException):
    """Raised when micropost content fails validation."""

    def __init__(self, details: list[ErrorDetail]) -> None:
        super().__init__(details[0].message, details)
