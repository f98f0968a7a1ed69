"""
Input models.

Pydantic models validating what callers may create or change. They are
checked before any storage access, so an invalid request never mutates
anything.
"""

from .comment import CommentCreate, CommentUpdate
from .playlist import PlaylistCreate, PlaylistUpdate
from .tweet import TweetCreate, TweetUpdate
from .user import UserCreate, UserUpdate
from .video import Visibility, VideoCreate, VideoUpdate

__all__ = [
    "CommentCreate",
    "CommentUpdate",
    "PlaylistCreate",
    "PlaylistUpdate",
    "TweetCreate",
    "TweetUpdate",
    "UserCreate",
    "UserUpdate",
    "VideoCreate",
    "VideoUpdate",
    "Visibility",
]
