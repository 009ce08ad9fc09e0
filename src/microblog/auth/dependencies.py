"""FastAPI security dependencies.

A request is authenticated by either:

- an ``Authorization: Bearer <jwt>`` header, or
- the remember-me cookie, matched against the stored token digest.

Either way the user row is reloaded from the database, so deleted accounts
and revoked admin flags take effect immediately.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from microblog.auth.jwt import TokenExpiredError, TokenInvalidError, decode_token
from microblog.auth.permissions import Role, roles_for
from microblog.auth.tokens import digest
from microblog.core.config import get_settings
from microblog.core.exceptions import ForbiddenException, UnauthorizedException
from microblog.database.repositories.users import UserData, UserRepository
from microblog.observability.logging import bind_context, get_logger


logger = get_logger(__name__)

# Token extraction only; a missing header falls through to the cookie.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{get_settings().api.v1_prefix}/auth/signin",
    scheme_name="JWT",
    description="JWT Bearer token authentication",
    auto_error=False,
)


def get_user_repository() -> UserRepository:
    """Provide the user repository used for authentication."""
    return UserRepository()


async def _authenticate(
    request: Request,
    token: str | None,
    users: UserRepository,
) -> UserData | None:
    """Resolve the requesting user.

    Returns:
        The user, or None when the request carries no credentials.

    Raises:
        UnauthorizedException: If a bearer token is present but unusable.
    """
    if token:
        try:
            payload = decode_token(token)
        except TokenExpiredError:
            raise UnauthorizedException("Token has expired") from None
        except TokenInvalidError:
            raise UnauthorizedException("Invalid token") from None

        try:
            user_id = int(payload.sub)
        except ValueError:
            raise UnauthorizedException("Invalid token") from None

        user = await users.get_by_id(user_id)
        if user is None:
            raise UnauthorizedException("User no longer exists")
        bind_context(user_id=user.id)
        return user

    cookie_name = get_settings().auth.remember_cookie.name
    remember_token = request.cookies.get(cookie_name)
    if not remember_token:
        return None

    user = await users.get_by_remember_token(digest(remember_token))
    if user is None:
        logger.debug("Stale remember cookie")
        return None
    bind_context(user_id=user.id)
    return user


async def get_current_user_optional(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserData | None:
    """Get the current user if the request is authenticated.

    Use this for routes that work for both authenticated and anonymous users.
    Unusable credentials are treated as anonymous.
    """
    try:
        return await _authenticate(request, token, users)
    except UnauthorizedException:
        return None


async def get_current_user(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserData:
    """Get the current authenticated user.

    Raises:
        UnauthorizedException: If the request is not authenticated.
    """
    user = await _authenticate(request, token, users)
    if user is None:
        raise UnauthorizedException("Not authenticated")
    return user


async def require_admin(
    user: Annotated[UserData, Depends(get_current_user)],
) -> UserData:
    """Require the current user to be an admin."""
    if Role.ADMIN not in roles_for(user):
        logger.warning("Admin required", user_id=user.id)
        raise ForbiddenException("Admin privileges required")
    return user


CurrentUser = Annotated[UserData, Depends(get_current_user)]
OptionalUser = Annotated[UserData | None, Depends(get_current_user_optional)]
AdminUser = Annotated[UserData, Depends(require_admin)]
