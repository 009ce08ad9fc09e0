"""Account field validation.

Each validator returns the errors for one attribute, using full messages
(attribute name followed by the rule). Blank means empty or whitespace-only.
"""

from __future__ import annotations

from microblog.core.exceptions import ErrorDetail
from microblog.services.users.constants import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    VALID_EMAIL_REGEX,
)


def normalize_email(email: str) -> str:
    """Strip surrounding whitespace and lowercase."""
    return email.strip().lower()


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _error(field: str, label: str, code: str, rule: str) -> ErrorDetail:
    return ErrorDetail(code=code, message=f"{label} {rule}", field=field)


def validate_name(name: str | None) -> list[ErrorDetail]:
    if _blank(name):
        return [_error("name", "Name", "blank", "can't be blank")]
    assert name is not None
    if len(name) > NAME_MAX_LENGTH:
        return [
            _error(
                "name",
                "Name",
                "too_long",
                f"is too long (maximum is {NAME_MAX_LENGTH} characters)",
            )
        ]
    return []


def validate_email(email: str | None) -> list[ErrorDetail]:
    """Validate an already-normalized email's presence, length and format."""
    if _blank(email):
        return [_error("email", "Email", "blank", "can't be blank")]
    assert email is not None
    if len(email) > EMAIL_MAX_LENGTH:
        return [
            _error(
                "email",
                "Email",
                "too_long",
                f"is too long (maximum is {EMAIL_MAX_LENGTH} characters)",
            )
        ]
    if not VALID_EMAIL_REGEX.match(email):
        return [_error("email", "Email", "invalid", "is invalid")]
    return []


def email_taken_error() -> ErrorDetail:
    return _error("email", "Email", "taken", "has already been taken")


def validate_password(password: str | None) -> list[ErrorDetail]:
    if _blank(password):
        return [_error("password", "Password", "blank", "can't be blank")]
    assert password is not None
    if len(password) < PASSWORD_MIN_LENGTH:
        return [
            _error(
                "password",
                "Password",
                "too_short",
                f"is too short (minimum is {PASSWORD_MIN_LENGTH} characters)",
            )
        ]
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        return [
            _error(
                "password",
                "Password",
                "too_long",
                f"is too long (maximum is {PASSWORD_MAX_LENGTH} bytes)",
            )
        ]
    return []


def validate_password_confirmation(
    password: str | None, password_confirmation: str | None
) -> list[ErrorDetail]:
    if _blank(password_confirmation):
        return [
            _error(
                "passwordConfirmation",
                "Password confirmation",
                "blank",
                "can't be blank",
            )
        ]
    if password_confirmation != password:
        return [
            _error(
                "passwordConfirmation",
                "Password confirmation",
                "confirmation",
                "doesn't match Password",
            )
        ]
    return []
