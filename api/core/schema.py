"""
Table definitions and the startup bootstrap that applies them.

Statements are idempotent (`IF NOT EXISTS`) so running them on every boot
is safe. Foreign keys have no ON DELETE CASCADE; removing a
user is done in application code (see `users.repository.delete_user`).
"""

from __future__ import annotations

import logging

from . import db

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id            BIGSERIAL PRIMARY KEY,
        username      VARCHAR(10)  NOT NULL,
        email         VARCHAR(320) NOT NULL,
        password_hash TEXT         NOT NULL,
        created_at    TIMESTAMPTZ  NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS users_email_lower_uq
        ON users (lower(email))
    """,
    """
    CREATE TABLE IF NOT EXISTS boards (
        id         BIGSERIAL PRIMARY KEY,
        title      VARCHAR(255) NOT NULL,
        content    TEXT         NOT NULL,
        user_id    BIGINT       NOT NULL REFERENCES users (id),
        created_at TIMESTAMPTZ  NOT NULL DEFAULT now(),
        updated_at TIMESTAMPTZ  NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS boards_user_id_idx
        ON boards (user_id)
    """,
    """
    CREATE TABLE IF NOT EXISTS user_sessions (
        id           BIGSERIAL PRIMARY KEY,
        user_id      BIGINT      NOT NULL REFERENCES users (id),
        token_hash   CHAR(64)    NOT NULL UNIQUE,
        created_at   TIMESTAMPTZ NOT NULL DEFAULT now(),
        expires_at   TIMESTAMPTZ NOT NULL,
        last_used_at TIMESTAMPTZ
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS user_sessions_user_id_idx
        ON user_sessions (user_id)
    """,
)


async def ensure_schema() -> None:
    async with db.transaction() as conn:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)
    logger.info("db_schema_ready statements=%s", len(SCHEMA_STATEMENTS))
