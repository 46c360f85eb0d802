"""
Shared test helpers: the in-memory repository stand-in and request shortcuts.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from users import repository as user_repository

PASSWORD = "password123"

# =============================================================================
# In-memory store
# =============================================================================


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FakeStore:
    """Mirrors the repository function signatures over plain dicts."""

    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self.boards: dict[int, dict] = {}
        self.sessions: dict[int, dict] = {}
        self._user_ids = itertools.count(1)
        self._board_ids = itertools.count(1)
        self._session_ids = itertools.count(1)

    # -- users ---------------------------------------------------------------

    async def create_user(self, *, username: str, email: str, password_hash: str) -> dict:
        user_id = next(self._user_ids)
        self.users[user_id] = {
            "id": user_id,
            "username": username.strip(),
            "email": user_repository.normalize_email(email),
            "password_hash": password_hash,
            "created_at": _now(),
        }
        return dict(self.users[user_id])

    async def email_exists(self, email: str) -> bool:
        return await self.get_user_by_email(email) is not None

    async def get_user_by_email(self, email: str) -> dict | None:
        wanted = user_repository.normalize_email(email)
        for row in self.users.values():
            if row["email"] == wanted:
                return dict(row)
        return None

    async def get_user_by_id(self, user_id: int) -> dict | None:
        row = self.users.get(user_id)
        return dict(row) if row is not None else None

    async def delete_user(self, user_id: int) -> int:
        board_ids = [b["id"] for b in self.boards.values() if b["user_id"] == user_id]
        for board_id in board_ids:
            del self.boards[board_id]
        for session_id in [s["id"] for s in self.sessions.values() if s["user_id"] == user_id]:
            del self.sessions[session_id]
        self.users.pop(user_id, None)
        return len(board_ids)

    # -- sessions ------------------------------------------------------------

    async def insert_session(self, *, user_id: int, token_hash: str, expires_at: datetime) -> dict:
        session_id = next(self._session_ids)
        self.sessions[session_id] = {
            "id": session_id,
            "user_id": user_id,
            "token_hash": token_hash,
            "created_at": _now(),
            "expires_at": expires_at,
            "last_used_at": None,
        }
        return dict(self.sessions[session_id])

    async def get_session_by_hash(self, token_hash: str) -> dict | None:
        for row in self.sessions.values():
            if row["token_hash"] == token_hash:
                return dict(row)
        return None

    async def touch_session(self, session_id: int, *, expires_at: datetime) -> None:
        row = self.sessions.get(session_id)
        if row is not None:
            row["last_used_at"] = _now()
            row["expires_at"] = expires_at

    async def delete_expired_sessions(self) -> int:
        now = _now()
        expired = [sid for sid, row in self.sessions.items() if row["expires_at"] <= now]
        for session_id in expired:
            del self.sessions[session_id]
        return len(expired)

    async def delete_session_by_id(self, session_id: int) -> None:
        self.sessions.pop(session_id, None)

    # -- boards --------------------------------------------------------------

    def _with_writer(self, row: dict) -> dict:
        return {**row, "writer": self.users[row["user_id"]]["username"]}

    async def insert_board(self, *, user_id: int, title: str, content: str) -> dict:
        board_id = next(self._board_ids)
        now = _now()
        self.boards[board_id] = {
            "id": board_id,
            "title": title,
            "content": content,
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        }
        return self._with_writer(self.boards[board_id])

    async def get_board(self, board_id: int) -> dict | None:
        row = self.boards.get(board_id)
        return self._with_writer(row) if row is not None else None

    async def list_boards(
        self,
        *,
        title_query: str = "",
        writer_query: str = "",
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        title_query = title_query.strip().lower()
        writer_query = writer_query.strip().lower()
        rows = [self._with_writer(row) for row in self.boards.values()]
        rows = [
            row
            for row in rows
            if title_query in row["title"].lower() and writer_query in row["writer"].lower()
        ]
        rows.sort(key=lambda row: row["id"], reverse=True)
        return rows[offset : offset + limit]

    async def update_board(self, board_id: int, *, title: str, content: str) -> dict | None:
        row = self.boards.get(board_id)
        if row is None:
            return None
        row.update(title=title, content=content, updated_at=_now())
        return self._with_writer(row)

    async def delete_board(self, board_id: int) -> bool:
        return self.boards.pop(board_id, None) is not None


USER_REPOSITORY_FUNCTIONS = (
    "create_user",
    "email_exists",
    "get_user_by_email",
    "get_user_by_id",
    "delete_user",
    "insert_session",
    "get_session_by_hash",
    "touch_session",
    "delete_session_by_id",
    "delete_expired_sessions",
)

BOARD_REPOSITORY_FUNCTIONS = (
    "insert_board",
    "get_board",
    "list_boards",
    "update_board",
    "delete_board",
)

# =============================================================================
# Request shortcuts
# =============================================================================


def sign_up(client: TestClient, username: str, email: str, password: str = PASSWORD):
    return client.post(
        "/api/users",
        json={"username": username, "email": email, "password": password},
    )


def login(client: TestClient, email: str, password: str = PASSWORD):
    return client.post("/api/users/sessions", json={"email": email, "password": password})


def sign_up_and_login(client: TestClient, username: str, email: str) -> dict:
    created = sign_up(client, username, email)
    assert created.status_code == 201, created.text
    resp = login(client, email)
    assert resp.status_code == 200, resp.text
    return resp.json()


def write_board(client: TestClient, title: str = "hello", content: str = "first post"):
    return client.post("/api/boards", json={"title": title, "content": content})
