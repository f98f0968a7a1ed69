"""
User models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._text import optional_text, required_text


class UserCreate(BaseModel):
    """Model for creating users."""

    username: str = Field(..., min_length=1, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Usernames are stored lowercased and may not contain spaces."""
        username = required_text(v, "username").lower()
        if any(ch.isspace() for ch in username):
            raise ValueError("username cannot contain whitespace")
        return username

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return required_text(v, "full name")

    model_config = ConfigDict(validate_assignment=True)


class UserUpdate(BaseModel):
    """Model for updating users."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=500)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v, "full name")
