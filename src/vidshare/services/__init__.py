"""
Service layer.

One service per resource. Every operation takes the session, the acting
user's id (where one is involved) and already-parsed arguments, and runs
under a storage deadline.
"""

from vidshare.services.comment_service import CommentService
from vidshare.services.like_service import LikeService
from vidshare.services.media_store import (
    LocalMediaStore,
    MediaReference,
    MediaStore,
    UploadedFile,
)
from vidshare.services.playlist_service import PlaylistService
from vidshare.services.subscription_service import SubscriptionService
from vidshare.services.tweet_service import TweetService
from vidshare.services.user_service import UserService
from vidshare.services.video_service import VideoService

__all__ = [
    "CommentService",
    "LikeService",
    "LocalMediaStore",
    "MediaReference",
    "MediaStore",
    "PlaylistService",
    "SubscriptionService",
    "TweetService",
    "UploadedFile",
    "UserService",
    "VideoService",
]
