"""
Playlist models.

Defines Pydantic models for creating and renaming playlists.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ._text import optional_text, required_text


class PlaylistCreate(BaseModel):
    """Model for creating playlists; both fields are required."""

    name: str = Field(..., min_length=1, max_length=255, description="Playlist name")
    description: str = Field(..., max_length=50000, description="Playlist description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate playlist name."""
        return required_text(v, "name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Validate playlist description."""
        return required_text(v, "description")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Watch later", "description": "Saved for the weekend"}
        }
    )


class PlaylistUpdate(BaseModel):
    """Model for updating playlists; at least one field must be set."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=50000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v, "name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v, "description")

    @model_validator(mode="after")
    def require_one_field(self) -> PlaylistUpdate:
        """Reject updates that change nothing."""
        if self.name is None and self.description is None:
            raise ValueError("name or description is required")
        return self
