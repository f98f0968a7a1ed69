"""
Comment models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._text import required_text


class CommentCreate(BaseModel):
    """Body of a new comment."""

    content: str = Field(..., min_length=1, max_length=10000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return required_text(v, "content")

    model_config = ConfigDict(json_schema_extra={"example": {"content": "Great video!"}})


class CommentUpdate(CommentCreate):
    """Replacement body of an existing comment."""

    pass
