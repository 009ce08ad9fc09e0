"""Authentication endpoints.

Provides:
- Sign-in (OAuth2 password form, ``username`` is the email)
- Sign-out (revokes the remember token)
- The current user

A successful sign-in returns a JWT access token and sets the remember-me
cookie, which keeps the session alive after the token expires.

Annotations are evaluated eagerly here: the rate limit decorator wraps
``signin`` and FastAPI resolves its parameters through the wrapper.
"""

from typing import Annotated, Final

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from microblog.api.dependencies import UserServiceDep
from microblog.auth.dependencies import CurrentUser
from microblog.auth.jwt import create_access_token
from microblog.auth.permissions import roles_for
from microblog.core.config import Settings, get_settings
from microblog.core.exceptions import ErrorResponse
from microblog.core.rate_limit import rate_limit_auth
from microblog.database.repositories.users import UserData
from microblog.observability.logging import get_logger
from microblog.schemas.auth import TokenResponse
from microblog.schemas.user import CurrentUserResponse
from microblog.services.users import UserService

logger = get_logger(__name__)

# OAuth2 bearer token type (standard value per RFC 6749)
BEARER: Final[str] = "bearer"

router = APIRouter(prefix="/auth", tags=["Auth"])


def set_remember_cookie(response: Response, token: str, settings: Settings) -> None:
    cookie = settings.auth.remember_cookie
    response.set_cookie(
        key=cookie.name,
        value=token,
        max_age=settings.remember_cookie_max_age,
        httponly=True,
        secure=cookie.secure,
        samesite=cookie.samesite,  # type: ignore[arg-type]
    )


def clear_remember_cookie(response: Response, settings: Settings) -> None:
    cookie = settings.auth.remember_cookie
    response.delete_cookie(
        key=cookie.name,
        httponly=True,
        secure=cookie.secure,
        samesite=cookie.samesite,  # type: ignore[arg-type]
    )


async def start_session(
    user: UserData,
    service: UserService,
    response: Response,
    settings: Settings,
) -> TokenResponse:
    """Sign ``user`` in.

    Rotates the remember token, sets the cookie and issues an access token.
    """
    remember_token = await service.remember(user)
    set_remember_cookie(response, remember_token, settings)

    access_token = create_access_token(str(user.id), roles=roles_for(user))
    return TokenResponse(
        access_token=access_token,
        token_type=BEARER,
        expires_in=settings.auth.jwt.access_token_expire_minutes * 60,
        user=CurrentUserResponse.from_user(user),
    )


@router.post(
    "/signin",
    response_model=TokenResponse,
    summary="Sign in",
    description=(
        "OAuth2 compatible password login. Returns an access token and sets "
        "the remember-me cookie."
    ),
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        429: {"model": ErrorResponse, "description": "Too many attempts"},
    },
)
@rate_limit_auth()
async def signin(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    service: UserServiceDep,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Authenticate with email and password."""
    user = await service.authenticate(form_data.username, form_data.password)
    token = await start_session(user, service, response, settings)
    logger.info("User signed in", user_id=user.id)
    return token


@router.delete(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    description="Revoke the remember token and clear the cookie.",
)
async def signout(
    response: Response,
    user: CurrentUser,
    service: UserServiceDep,
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Sign the current user out everywhere the remember cookie was used."""
    await service.forget(user)
    clear_remember_cookie(response, settings)
    logger.info("User signed out", user_id=user.id)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Current user",
    description="The account the request is authenticated as.",
)
async def me(user: CurrentUser) -> CurrentUserResponse:
    return CurrentUserResponse.from_user(user)
