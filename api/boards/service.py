"""
Board business logic.

Scope:
- create a board for the logged-in user
- public listing (newest first, optional title/writer search) and lookup
- owner-only update and delete
"""

from __future__ import annotations

import logging

from fastapi import status

from core.errors import InvalidArgumentError
from users import repository as user_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def to_board_response(row: dict) -> schemas.BoardResponse:
    return schemas.BoardResponse(
        id=int(row["id"]),
        title=str(row["title"]),
        content=str(row["content"] or ""),
        writer=str(row["writer"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


async def _get_board_or_raise(board_id: int) -> dict:
    row = await repository.get_board(board_id)
    if row is None:
        raise InvalidArgumentError(
            f"Board does not exist. id = {board_id}",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return row


def _check_owner(row: dict, user_id: int, action: str) -> None:
    if int(row["user_id"]) != int(user_id):
        logger.warning(
            "board_%s_forbidden board_id=%s owner_id=%s user_id=%s",
            action,
            row["id"],
            row["user_id"],
            user_id,
        )
        raise InvalidArgumentError(
            f"Only the writer can {action} this board.",
            status_code=status.HTTP_403_FORBIDDEN,
        )


async def write(payload: schemas.BoardRequest, user_id: int) -> schemas.BoardResponse:
    user_row = await user_repository.get_user_by_id(user_id)
    if user_row is None:
        raise InvalidArgumentError("User does not exist.")

    row = await repository.insert_board(
        user_id=int(user_row["id"]),
        title=payload.title,
        content=payload.content,
    )
    logger.info("board_created board_id=%s user_id=%s", row["id"], user_id)
    return to_board_response(row)


async def get_board(board_id: int) -> schemas.BoardResponse:
    return to_board_response(await _get_board_or_raise(board_id))


async def list_boards(
    *,
    title: str = "",
    writer: str = "",
    limit: int = 100,
    offset: int = 0,
) -> list[schemas.BoardResponse]:
    rows = await repository.list_boards(
        title_query=title,
        writer_query=writer,
        limit=limit,
        offset=offset,
    )
    return [to_board_response(row) for row in rows]


async def edit(board_id: int, payload: schemas.BoardRequest, user_id: int) -> schemas.BoardResponse:
    row = await _get_board_or_raise(board_id)
    _check_owner(row, user_id, "edit")

    updated = await repository.update_board(board_id, title=payload.title, content=payload.content)
    if updated is None:
        # Deleted between the lookup and the update.
        raise InvalidArgumentError(
            f"Board does not exist. id = {board_id}",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    logger.info("board_updated board_id=%s user_id=%s", board_id, user_id)
    return to_board_response(updated)


async def delete(board_id: int, user_id: int) -> dict:
    row = await _get_board_or_raise(board_id)
    _check_owner(row, user_id, "delete")

    await repository.delete_board(board_id)
    logger.info("board_deleted board_id=%s user_id=%s", board_id, user_id)
    return {"ok": True, "board_id": board_id}
