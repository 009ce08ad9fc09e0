"""Application roles."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from microblog.database.repositories.users import UserData


class Role(StrEnum):
    """Application roles.

    Every account has ``user``; accounts with the admin flag also have
    ``admin``.
    """

    USER = "user"
    ADMIN = "admin"


def roles_for(user: UserData) -> list[str]:
    """Roles carried in a user's access token."""
    roles = [Role.USER.value]
    if user.admin:
        roles.append(Role.ADMIN.value)
    return roles
