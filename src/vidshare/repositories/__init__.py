"""
Repository layer for data access patterns.

This module provides repository implementations following the Repository
pattern: each wraps one table and the feeds built around it.
"""

from .base import BaseRepository, BaseSQLAlchemyRepository
from .comment_repository import CommentRepository
from .like_repository import LikeEdgeStore, LikeRepository
from .playlist_repository import PlaylistRepository
from .subscription_repository import SubscriptionRepository
from .tweet_repository import TweetRepository
from .user_repository import UserRepository
from .video_repository import VideoRepository
from .watch_history_repository import WatchHistoryRepository

__all__ = [
    "BaseRepository",
    "BaseSQLAlchemyRepository",
    "CommentRepository",
    "LikeEdgeStore",
    "LikeRepository",
    "PlaylistRepository",
    "SubscriptionRepository",
    "TweetRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
