"""
Session dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Request, Response

from core import settings

from . import service


def get_session_token(request: Request) -> str | None:
    token = (request.cookies.get(settings.session_cookie_name()) or "").strip()
    return token or None


async def get_current_user(session_token: str | None = Depends(get_session_token)) -> dict:
    return await service.get_user_from_session_token(session_token)


def set_session_cookie(response: Response, raw_token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name(),
        value=raw_token,
        max_age=settings.session_ttl_minutes() * 60,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure(),
        samesite=settings.session_cookie_samesite(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name(),
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure(),
        samesite=settings.session_cookie_samesite(),
    )
