"""User service: signup, authentication, profile edits and the user index.

Provides methods for:
- Account creation with full-message validation
- Email/password authentication
- Remember token rotation (sign-in / sign-out)
- Profile edits restricted to the account owner
- Admin-only account deletion
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from microblog.auth.passwords import hash_password, verify_password
from microblog.auth.tokens import digest, new_remember_token
from microblog.core.exceptions import ForbiddenException
from microblog.database.exceptions import DuplicateRecordError
from microblog.database.repositories.users import UserData, UserRepository
from microblog.observability.logging import get_logger
from microblog.observability.metrics import SIGNUPS_TOTAL
from microblog.services.pagination import Page, page_window
from microblog.services.users.constants import PERMITTED_UPDATE_ATTRIBUTES
from microblog.services.users.exceptions import (
    AccountValidationError,
    ForbiddenAttributeError,
    InvalidCredentialsError,
    NotCorrectUserError,
    SelfDeletionError,
    UserNotFoundError,
)
from microblog.services.users.validation import (
    email_taken_error,
    normalize_email,
    validate_email,
    validate_name,
    validate_password,
    validate_password_confirmation,
)


if TYPE_CHECKING:
    from collections.abc import Mapping

    from microblog.core.exceptions import ErrorDetail

logger = get_logger(__name__)


class UserService:
    """Service for user accounts and credentials."""

    def __init__(self, repository: UserRepository | None = None) -> None:
        """Initialize the service.

        Args:
            repository: Optional UserRepository instance.
        """
        self._repository = repository or UserRepository()

    # =========================================================================
    # Validation
    # =========================================================================

    async def _validate(
        self,
        *,
        name: str | None,
        email: str,
        password: str | None,
        password_confirmation: str | None,
        exclude_id: int | None = None,
    ) -> None:
        """Run every rule and raise once with all failures."""
        errors: list[ErrorDetail] = []
        errors += validate_name(name)

        email_errors = validate_email(email)
        if not email_errors and await self._repository.email_taken(
            email, exclude_id=exclude_id
        ):
            email_errors.append(email_taken_error())
        errors += email_errors

        errors += validate_password(password)
        errors += validate_password_confirmation(password, password_confirmation)

        if errors:
            logger.info(
                "Account validation failed",
                fields=sorted({e.field for e in errors if e.field}),
            )
            raise AccountValidationError(errors)

    # =========================================================================
    # Signup and credentials
    # =========================================================================

    async def create(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        password_confirmation: str | None,
    ) -> UserData:
        """Create an account.

        Nothing is written unless every rule passes.

        Raises:
            AccountValidationError: With one detail per failed rule.
        """
        email = normalize_email(email or "")
        await self._validate(
            name=name,
            email=email,
            password=password,
            password_confirmation=password_confirmation,
        )
        assert name is not None
        assert password is not None

        try:
            user = await self._repository.create(
                name=name,
                email=email,
                password_digest=hash_password(password),
                remember_token=digest(new_remember_token()),
            )
        except DuplicateRecordError:
            # Lost a race against a concurrent signup for the same email.
            raise AccountValidationError([email_taken_error()]) from None

        SIGNUPS_TOTAL.inc()
        logger.info("User signed up", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> UserData:
        """Return the account matching the credentials.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match. The two cases are indistinguishable.
        """
        user = await self._repository.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_digest):
            logger.info("Sign-in rejected")
            raise InvalidCredentialsError
        return user

    async def remember(self, user: UserData) -> str:
        """Rotate the remember token and return the new plaintext token."""
        token = new_remember_token()
        if not await self._repository.update_remember_token(user.id, digest(token)):
            raise UserNotFoundError(user.id)
        logger.debug("Remember token rotated", user_id=user.id)
        return token

    async def forget(self, user: UserData) -> None:
        """Rotate the remember token without handing it out.

        Any cookie issued before this call stops working.
        """
        await self._repository.update_remember_token(
            user.id, digest(new_remember_token())
        )
        logger.debug("Remember token revoked", user_id=user.id)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get(self, user_id: int) -> UserData:
        """Raises: UserNotFoundError."""
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def list(self, page: int = 1, per_page: int | None = None) -> Page[UserData]:
        """Page through all users in id order."""
        page, per_page, offset = page_window(page, per_page)
        items = await self._repository.list(limit=per_page, offset=offset)
        total = await self._repository.count()
        return Page(items=items, total=total, page=page, per_page=per_page)

    # =========================================================================
    # Profile edits and deletion
    # =========================================================================

    async def update(
        self,
        actor: UserData,
        user_id: int,
        attributes: Mapping[str, Any],
    ) -> UserData:
        """Edit a profile.

        Only ``name``, ``email``, ``password`` and ``password_confirmation``
        may be supplied. Omitted name/email keep their current values; a
        password and its confirmation are always required.

        Raises:
            ForbiddenAttributeError: If any other attribute (e.g. ``admin``)
                is supplied.
            NotCorrectUserError: If ``actor`` is not the profile owner.
            UserNotFoundError: If the profile does not exist.
            AccountValidationError: With one detail per failed rule.
        """
        for attribute in attributes:
            if attribute not in PERMITTED_UPDATE_ATTRIBUTES:
                logger.warning(
                    "Forbidden attribute in profile edit",
                    user_id=actor.id,
                    attribute=attribute,
                )
                raise ForbiddenAttributeError(attribute)

        if actor.id != user_id:
            raise NotCorrectUserError

        current = await self.get(user_id)
        name = attributes.get("name", current.name)
        if "email" in attributes:
            email = normalize_email(attributes["email"] or "")
        else:
            email = current.email
        password = attributes.get("password")
        password_confirmation = attributes.get("password_confirmation")

        await self._validate(
            name=name,
            email=email,
            password=password,
            password_confirmation=password_confirmation,
            exclude_id=user_id,
        )
        assert password is not None

        try:
            updated = await self._repository.update_profile(
                user_id,
                name=name,
                email=email,
                password_digest=hash_password(password),
            )
        except DuplicateRecordError:
            raise AccountValidationError([email_taken_error()]) from None

        if updated is None:
            raise UserNotFoundError(user_id)
        logger.info("Profile updated", user_id=user_id)
        return updated

    async def delete(self, actor: UserData, user_id: int) -> None:
        """Delete an account and, by cascade, its posts and relationships.

        Raises:
            ForbiddenException: If ``actor`` is not an admin.
            SelfDeletionError: If an admin targets their own account.
            UserNotFoundError: If the account does not exist.
        """
        if not actor.admin:
            raise ForbiddenException("Admin privileges required")
        if actor.id == user_id:
            raise SelfDeletionError
        if not await self._repository.delete(user_id):
            raise UserNotFoundError(user_id)
        logger.info("User deleted", user_id=user_id, deleted_by=actor.id)
