"""Database connection and data access."""

from microblog.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


__all__ = [
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
