"""
Pydantic schemas for board endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class BoardRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class BoardResponse(BaseModel):
    id: int
    title: str
    content: str
    writer: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BoardListResponse(BaseModel):
    boards: list[BoardResponse]
    count: int
    limit: int
    offset: int
