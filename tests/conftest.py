"""
Pytest fixtures for the API tests.

The repository modules are swapped for the in-memory `FakeStore` from
`helpers.py`, so the routers and services run for real without PostgreSQL.
The app is used without its lifespan (no `with TestClient(...)`), which
keeps the DB pool untouched.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from boards import repository as board_repository
from helpers import BOARD_REPOSITORY_FUNCTIONS, USER_REPOSITORY_FUNCTIONS, FakeStore
from main import create_app
from users import repository as user_repository

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch: pytest.MonkeyPatch) -> None:
    """Cheapest bcrypt cost so hashing does not dominate test time."""
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()
    for name in USER_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(user_repository, name, getattr(fake, name))
    for name in BOARD_REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(board_repository, name, getattr(fake, name))
    return fake


@pytest.fixture
def app(store: FakeStore) -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def other_client(app: FastAPI) -> TestClient:
    """Second browser with its own cookie jar."""
    return TestClient(app)

