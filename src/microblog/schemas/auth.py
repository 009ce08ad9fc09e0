"""Authentication schemas."""

from __future__ import annotations

from pydantic import Field

from microblog.schemas.base import APIResponse
from microblog.schemas.user import CurrentUserResponse


class TokenResponse(APIResponse):
    """Token response for successful sign-in or signup.

    Token fields keep the OAuth2 snake_case names so standard clients (and the
    docs "Authorize" dialog) can read them. The remember token itself travels
    only in the cookie.
    """

    access_token: str = Field(..., alias="access_token", description="JWT access token")
    token_type: str = Field(default="bearer", alias="token_type", description="Token type")
    expires_in: int = Field(
        ..., alias="expires_in", description="Access token lifetime in seconds"
    )
    user: CurrentUserResponse = Field(..., description="The signed-in user")
