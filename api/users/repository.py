"""
User and session persistence helpers.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import db

USER_COLUMNS = "id, username, email, password_hash, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, username: str, email: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (username, email, password_hash)
        VALUES ($1, $2, $3)
        RETURNING {USER_COLUMNS}
        """,
        username.strip(),
        normalize_email(email),
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def email_exists(email: str) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM users
        WHERE lower(email) = lower($1)
        LIMIT 1
        """,
        normalize_email(email),
    )
    return row is not None


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def delete_user(user_id: int) -> int:
    """
    Remove a user and everything that references them.

    Boards and sessions go first so the foreign keys on `users.id` hold at
    every step. Returns the number of boards removed.
    """
    async with db.transaction() as conn:
        boards_status = await conn.execute("DELETE FROM boards WHERE user_id = $1", user_id)
        await conn.execute("DELETE FROM user_sessions WHERE user_id = $1", user_id)
        await conn.execute("DELETE FROM users WHERE id = $1", user_id)
    return db.affected_rows(boards_status)


async def insert_session(*, user_id: int, token_hash: str, expires_at: datetime) -> dict:
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)

    row = await db.fetch_one(
        """
        INSERT INTO user_sessions (user_id, token_hash, expires_at)
        VALUES ($1, $2, $3)
        RETURNING id, user_id, token_hash, created_at, expires_at, last_used_at
        """,
        user_id,
        token_hash,
        expires_at,
    )
    if row is None:
        raise RuntimeError("Failed to insert session.")
    return row


async def get_session_by_hash(token_hash: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, token_hash, created_at, expires_at, last_used_at
        FROM user_sessions
        WHERE token_hash = $1
        """,
        token_hash,
    )


async def touch_session(session_id: int, *, expires_at: datetime) -> None:
    await db.execute(
        """
        UPDATE user_sessions
        SET last_used_at = now(),
            expires_at = $2
        WHERE id = $1
        """,
        session_id,
        expires_at,
    )


async def delete_session_by_id(session_id: int) -> None:
    await db.execute(
        """
        DELETE FROM user_sessions
        WHERE id = $1
        """,
        session_id,
    )


async def delete_expired_sessions() -> int:
    status_tag = await db.execute(
        """
        DELETE FROM user_sessions
        WHERE expires_at <= now()
        """
    )
    return db.affected_rows(status_tag)
