"""Exceptions for the user service."""

from __future__ import annotations

from microblog.core.exceptions import (
    ErrorDetail,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    UnprocessableEntityException,
)


class UserNotFoundError(NotFoundException):
    """Raised when a user id does not resolve to an account."""

    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id)


class AccountValidationError(UnprocessableEntityException):
    """Raised when signup or profile data fails validation.

    Carries one detail per failed rule, each with its full message
    (e.g. ``"Name can't be blank"``).
    """

    def __init__(self, details: list[ErrorDetail]) -> None:
        count = len(details)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"The form contains {count} {noun}.", details)

    @property
    def full_messages(self) -> list[str]:
        return [detail.message for detail in self.details or []]


class InvalidCredentialsError(UnauthorizedException):
    """Raised when an email/password pair does not match an account."""

    def __init__(self) -> None:
        super().__init__("Invalid email/password combination")


class ForbiddenAttributeError(ForbiddenException):
    """Raised when a profile edit tries to set a protected attribute."""

    def __init__(self, attribute: str) -> None:
        self.attribute = attribute
        super().__init__(f"Attribute '{attribute}' cannot be changed")


class NotCorrectUserError(ForbiddenException):
    """Raised when a user tries to edit someone else's profile."""

    def __init__(self) -> None:
        super().__init__("You can only edit your own profile")


class SelfDeletionError(ForbiddenException):
    """Raised when an admin tries to delete their own account."""

    def __init__(self) -> None:
        super().__init__("Admins cannot delete their own account")
