"""
User account and session endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from . import dependencies, schemas, service

router = APIRouter(prefix="/api/users")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.UserResponse)
async def sign_up(request: schemas.SignUpRequest) -> schemas.UserResponse:
    return await service.sign_up(request)


@router.post("/sessions", response_model=schemas.UserResponse)
async def login(
    request: schemas.LoginRequest,
    response: Response,
    session_token: str | None = Depends(dependencies.get_session_token),
) -> schemas.UserResponse:
    user, raw_token = await service.login(request, previous_token=session_token)
    dependencies.set_session_cookie(response, raw_token)
    return user


@router.post("/logout")
async def logout(
    response: Response,
    session_token: str | None = Depends(dependencies.get_session_token),
) -> dict:
    result = await service.logout(session_token)
    dependencies.clear_session_cookie(response)
    return result


@router.delete("/withdraw")
async def withdraw(
    response: Response,
    current_user: dict = Depends(dependencies.get_current_user),
) -> dict:
    result = await service.withdraw(int(current_user["id"]))
    dependencies.clear_session_cookie(response)
    return result


@router.get("/me", response_model=schemas.UserResponse)
async def me(current_user: dict = Depends(dependencies.get_current_user)) -> schemas.UserResponse:
    return service.to_user_response(current_user)
