"""
User business logic: sign up, login/logout sessions, withdrawal.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import asyncpg
from fastapi import status

from core import settings
from core.errors import InvalidArgumentError

from . import repository, schemas, security

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "Login required."
BAD_CREDENTIALS = "Email or password does not match."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _session_expiry() -> datetime:
    return _utc_now() + timedelta(minutes=settings.session_ttl_minutes())


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        email=str(user_row["email"]),
    )


async def sign_up(payload: schemas.SignUpRequest) -> schemas.UserResponse:
    if await repository.email_exists(payload.email):
        raise InvalidArgumentError("Email is already registered.")

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_user(
            username=payload.username,
            email=payload.email,
            password_hash=password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        # A concurrent sign-up took the email between the check and the insert.
        raise InvalidArgumentError("Email is already registered.") from exc
    logger.info("user_signed_up user_id=%s", user_row["id"])
    return to_user_response(user_row)


async def _discard_session(raw_token: str | None) -> bool:
    """
    Delete the presented session. True only if it existed and had not expired.
    """
    if not (raw_token or "").strip():
        return False
    token_hash = security.hash_session_token(raw_token)
    session_row = await repository.get_session_by_hash(token_hash)
    if session_row is None:
        return False
    await repository.delete_session_by_id(int(session_row["id"]))
    return _is_live(session_row)


def _is_live(session_row: dict) -> bool:
    expires_at = session_row.get("expires_at")
    return isinstance(expires_at, datetime) and expires_at > _utc_now()


async def login(
    payload: schemas.LoginRequest,
    *,
    previous_token: str | None = None,
) -> tuple[schemas.UserResponse, str]:
    """
    Check credentials and open a new session.

    Returns the user DTO and the raw session token for the cookie. Whatever
    session the client presented is dropped first so a login always gets a
    fresh token.
    """
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None or not security.verify_password(
        payload.password, str(user_row.get("password_hash") or "")
    ):
        logger.warning("login_rejected")
        raise InvalidArgumentError(BAD_CREDENTIALS, status_code=status.HTTP_401_UNAUTHORIZED)

    await _discard_session(previous_token)
    purged = await repository.delete_expired_sessions()
    if purged:
        logger.info("sessions_purged count=%s", purged)

    raw_token = security.build_session_token()
    await repository.insert_session(
        user_id=int(user_row["id"]),
        token_hash=security.hash_session_token(raw_token),
        expires_at=_session_expiry(),
    )
    logger.info("user_logged_in user_id=%s", user_row["id"])
    return to_user_response(user_row), raw_token


async def logout(raw_token: str | None) -> dict:
    if not await _discard_session(raw_token):
        raise InvalidArgumentError("Already logged out or invalid request.")
    return {"ok": True, "message": "Logged out."}


async def withdraw(user_id: int) -> dict:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise InvalidArgumentError("User does not exist.")

    removed_boards = await repository.delete_user(int(user_row["id"]))
    logger.info("user_withdrawn user_id=%s boards_removed=%s", user_id, removed_boards)
    return {"ok": True, "message": "Account deleted."}


async def get_user_from_session_token(raw_token: str | None) -> dict:
    """
    Resolve the session cookie to a user row, sliding its expiry forward.
    """
    if not (raw_token or "").strip():
        raise InvalidArgumentError(LOGIN_REQUIRED, status_code=status.HTTP_401_UNAUTHORIZED)

    session_row = await repository.get_session_by_hash(security.hash_session_token(raw_token))
    if session_row is None:
        raise InvalidArgumentError(LOGIN_REQUIRED, status_code=status.HTTP_401_UNAUTHORIZED)

    if not _is_live(session_row):
        await repository.delete_session_by_id(int(session_row["id"]))
        raise InvalidArgumentError(
            "Session expired. Please log in again.",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    user_row = await repository.get_user_by_id(int(session_row["user_id"]))
    if user_row is None:
        await repository.delete_session_by_id(int(session_row["id"]))
        raise InvalidArgumentError(LOGIN_REQUIRED, status_code=status.HTTP_401_UNAUTHORIZED)

    await repository.touch_session(int(session_row["id"]), expires_at=_session_expiry())
    return user_row
