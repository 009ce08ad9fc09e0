"""Authentication and authorization module.

This module provides:
- bcrypt password hashing
- remember tokens and their digests
- JWT access token creation and validation
- FastAPI security dependencies
"""

from microblog.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    require_admin,
)
from microblog.auth.jwt import create_access_token, decode_token
from microblog.auth.passwords import hash_password, verify_password
from microblog.auth.permissions import Role, roles_for
from microblog.auth.tokens import digest, new_remember_token


__all__ = [
    "Role",
    "create_access_token",
    "decode_token",
    "digest",
    "get_current_user",
    "get_current_user_optional",
    "hash_password",
    "new_remember_token",
    "require_admin",
    "roles_for",
    "verify_password",
]
