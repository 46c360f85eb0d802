"""
Password and session-token helpers.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

import bcrypt

from core import settings


class SessionTokenError(RuntimeError):
    pass


def _prehash(plain_password: str) -> bytes:
    # bcrypt only takes 72 bytes; a SHA-256 digest keeps long UTF-8 input whole.
    digest = hashlib.sha256(plain_password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise ValueError("Password is empty.")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds())
    return bcrypt.hashpw(_prehash(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    hashed = (password_hash or "").encode("utf-8")
    if not plain_password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_prehash(plain_password), hashed)
    except ValueError:
        return False


def build_session_token() -> str:
    # URL-safe so it can go into a cookie unquoted.
    return secrets.token_urlsafe(32)


def hash_session_token(raw_token: str) -> str:
    token = (raw_token or "").strip().encode("utf-8")
    if not token:
        raise SessionTokenError("Session token is empty.")
    return hashlib.sha256(token).hexdigest()
