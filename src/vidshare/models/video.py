"""
Video models.

Defines Pydantic models for publishing and editing videos. File payloads
are handled by the media store; these models only carry metadata.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from vidshare.feed.predicates import EntityId

from ._text import optional_text, required_text


class Visibility(str, Enum):
    """Publish state as submitted by clients."""

    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def is_published(self) -> bool:
        return self is Visibility.PUBLIC


class VideoCreate(BaseModel):
    """Metadata of a newly published video."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    visibility: Visibility = Field(default=Visibility.PUBLIC)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return required_text(v, "title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return required_text(v, "description")


class VideoUpdate(BaseModel):
    """Editable video metadata; unset fields are left unchanged."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    visibility: Optional[Visibility] = None
    playlist_ids: list[EntityId] = Field(
        default_factory=list,
        description="Owner playlists the video should be added to",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v, "title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v, "description")
