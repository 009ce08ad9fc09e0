"""User service module.

Provides signup, authentication and account management.
"""

from microblog.services.users.service import UserService


__all__ = ["UserService"]
