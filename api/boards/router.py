"""
FastAPI router for board endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from users import dependencies as user_dependencies

from . import schemas, service

router = APIRouter(prefix="/api/boards")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.BoardResponse)
async def write_board(
    request: schemas.BoardRequest,
    current_user: dict = Depends(user_dependencies.get_current_user),
) -> schemas.BoardResponse:
    return await service.write(request, int(current_user["id"]))


@router.get("", response_model=schemas.BoardListResponse)
async def list_boards(
    title: str = Query(default="", max_length=255),
    writer: str = Query(default="", max_length=10),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> schemas.BoardListResponse:
    """
    List boards newest first, optionally filtered by title or writer name.
    """
    boards = await service.list_boards(title=title, writer=writer, limit=limit, offset=offset)
    return schemas.BoardListResponse(
        boards=boards,
        count=len(boards),
        limit=limit,
        offset=offset,
    )


@router.get("/{board_id}", response_model=schemas.BoardResponse)
async def get_board(board_id: int) -> schemas.BoardResponse:
    return await service.get_board(board_id)


@router.put("/{board_id}", response_model=schemas.BoardResponse)
async def edit_board(
    board_id: int,
    request: schemas.BoardRequest,
    current_user: dict = Depends(user_dependencies.get_current_user),
) -> schemas.BoardResponse:
    return await service.edit(board_id, request, int(current_user["id"]))


@router.delete("/{board_id}")
async def delete_board(
    board_id: int,
    current_user: dict = Depends(user_dependencies.get_current_user),
) -> dict:
    return await service.delete(board_id, int(current_user["id"]))
