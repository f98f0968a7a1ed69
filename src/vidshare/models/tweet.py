"""
Tweet models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ._text import required_text


class TweetCreate(BaseModel):
    """Body of a new tweet."""

    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return required_text(v, "content")


class TweetUpdate(TweetCreate):
    """Replacement body of an existing tweet."""

    pass
