"""Database schema for users, microposts and relationships.

The DDL is idempotent and is applied on startup when
``database.apply_schema`` is enabled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

SCHEMA_NAME = "microblog"

SCHEMA_SQL = """
CREATE SCHEMA IF NOT EXISTS microblog;

CREATE TABLE IF NOT EXISTS microblog.users (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(50) NOT NULL,
    email VARCHAR(255) NOT NULL,
    password_digest VARCHAR(255) NOT NULL,
    remember_token VARCHAR(64),
    admin BOOLEAN NOT NULL DEFAULT FALSE,
    created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
);

CREATE UNIQUE INDEX IF NOT EXISTS index_users_on_lower_email
    ON microblog.users (LOWER(email));
CREATE INDEX IF NOT EXISTS index_users_on_remember_token
    ON microblog.users (remember_token);

CREATE TABLE IF NOT EXISTS microblog.microposts (
    id BIGSERIAL PRIMARY KEY,
    user_id BIGINT NOT NULL
        REFERENCES microblog.users(id) ON DELETE CASCADE,
    content VARCHAR(140) NOT NULL,
    created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW()
);

CREATE INDEX IF NOT EXISTS index_microposts_on_user_id_and_created_at
    ON microblog.microposts (user_id, created_at);

CREATE TABLE IF NOT EXISTS microblog.relationships (
    id BIGSERIAL PRIMARY KEY,
    follower_id BIGINT NOT NULL
        REFERENCES microblog.users(id) ON DELETE CASCADE,
    followed_id BIGINT NOT NULL
        REFERENCES microblog.users(id) ON DELETE CASCADE,
    created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT NOW(),
    CONSTRAINT index_relationships_on_follower_id_and_followed_id
        UNIQUE (follower_id, followed_id)
);

CREATE INDEX IF NOT EXISTS index_relationships_on_followed_id
    ON microblog.relationships (followed_id);
"""


async def apply_schema(pool: Pool) -> None:
    """Create the schema objects that do not exist yet."""
    logger.info("Applying database schema", schema=SCHEMA_NAME)
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("Database schema up to date")
