"""
Board persistence (raw SQL).

Read queries join `users` so every returned row carries the author's
username as `writer`.
"""

from __future__ import annotations

from core import db

_SELECT_BOARD = """
    SELECT b.id, b.title, b.content, b.user_id, b.created_at, b.updated_at,
           u.username AS writer
    FROM boards b
    JOIN users u ON u.id = b.user_id
"""


def _like_literal(value: str) -> str:
    # Match user input literally inside ILIKE ... ESCAPE '\'.
    value = (value or "").strip()
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def insert_board(*, user_id: int, title: str, content: str) -> dict:
    row = await db.fetch_one(
        """
        WITH inserted AS (
            INSERT INTO boards (user_id, title, content)
            VALUES ($1, $2, $3)
            RETURNING id, title, content, user_id, created_at, updated_at
        )
        SELECT i.id, i.title, i.content, i.user_id, i.created_at, i.updated_at,
               u.username AS writer
        FROM inserted i
        JOIN users u ON u.id = i.user_id
        """,
        user_id,
        title,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to insert board.")
    return row


async def get_board(board_id: int) -> dict | None:
    return await db.fetch_one(
        _SELECT_BOARD
        + """
        WHERE b.id = $1
        """,
        board_id,
    )


async def list_boards(
    *,
    title_query: str = "",
    writer_query: str = "",
    limit: int = 100,
    offset: int = 0,
) -> list[dict]:
    """
    Newest first. Empty queries match everything; non-empty ones are
    case-insensitive substring matches.
    """
    return await db.fetch_all(
        _SELECT_BOARD
        + """
        WHERE ($1 = '' OR b.title ILIKE ('%' || $1 || '%') ESCAPE '\\')
          AND ($2 = '' OR u.username ILIKE ('%' || $2 || '%') ESCAPE '\\')
        ORDER BY b.id DESC
        LIMIT $3 OFFSET $4
        """,
        _like_literal(title_query),
        _like_literal(writer_query),
        limit,
        offset,
    )


async def update_board(board_id: int, *, title: str, content: str) -> dict | None:
    row = await db.fetch_one(
        """
        UPDATE boards
        SET title = $2,
            content = $3,
            updated_at = now()
        WHERE id = $1
        RETURNING id
        """,
        board_id,
        title,
        content,
    )
    if row is None:
        return None
    return await get_board(board_id)


async def delete_board(board_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM boards
        WHERE id = $1
        RETURNING id
        """,
        board_id,
    )
    return row is not None
