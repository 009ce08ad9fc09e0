"""Database repositories for data access."""

from microblog.database.repositories.microposts import (
    FeedItemData,
    MicropostData,
    MicropostRepository,
)
from microblog.database.repositories.relationships import (
    RelationshipData,
    RelationshipRepository,
)
from microblog.database.repositories.users import UserData, UserRepository


__all__ = [
    "FeedItemData",
    "MicropostData",
    "MicropostRepository",
    "RelationshipData",
    "RelationshipRepository",
    "UserData",
    "UserRepository",
]
