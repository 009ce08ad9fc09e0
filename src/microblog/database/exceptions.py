"""Driver-independent errors raised by the repositories.

Repositories translate asyncpg integrity errors into these so that services
never depend on the database driver.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository errors."""

    def __init__(self, message: str, constraint: str | None = None) -> None:
        self.constraint = constraint
        super().__init__(message)


class DuplicateRecordError(RepositoryError):
    """A unique constraint or unique index rejected the write."""


class MissingReferenceError(RepositoryError):
    """A foreign key pointed at a row that does not exist."""
