"""
Dependency injection container for vidshare.

Wires repositories, the media store, the shared edge toggle and the
services together. Repositories are stateless and created per call;
services and collaborators are cached singletons that tests can replace
with :meth:`Container.override` and restore with :meth:`Container.reset`.

Usage
-----
    >>> from vidshare.container import container
    >>> service = container.video_service
    >>> repo = container.create_video_repository()
"""

from __future__ import annotations

from functools import cached_property
from typing import Any

from vidshare.feed.toggle import EdgeToggle, edge_toggle
from vidshare.repositories import (
    CommentRepository,
    LikeRepository,
    PlaylistRepository,
    SubscriptionRepository,
    TweetRepository,
    UserRepository,
    VideoRepository,
    WatchHistoryRepository,
)
from vidshare.services import (
    CommentService,
    LikeService,
    LocalMediaStore,
    MediaStore,
    PlaylistService,
    SubscriptionService,
    TweetService,
    UserService,
    VideoService,
)

_CACHED = (
    "media_store",
    "edge_toggle",
    "video_service",
    "comment_service",
    "like_service",
    "subscription_service",
    "tweet_service",
    "playlist_service",
    "user_service",
)


class Container:
    """
    Dependency injection container for vidshare.

    Examples
    --------
    >>> container = Container()
    >>> container.create_video_repository() is container.create_video_repository()
    False
    >>> container.video_service is container.video_service
    True
    """

    # -------------------------------------------------------------------------
    # Repository Factory Methods (Transient - new instance per call)
    # -------------------------------------------------------------------------

    def create_user_repository(self) -> UserRepository:
        return UserRepository()

    def create_video_repository(self) -> VideoRepository:
        return VideoRepository()

    def create_comment_repository(self) -> CommentRepository:
        return CommentRepository()

    def create_tweet_repository(self) -> TweetRepository:
        return TweetRepository()

    def create_like_repository(self) -> LikeRepository:
        return LikeRepository()

    def create_subscription_repository(self) -> SubscriptionRepository:
        return SubscriptionRepository()

    def create_playlist_repository(self) -> PlaylistRepository:
        return PlaylistRepository()

    def create_watch_history_repository(self) -> WatchHistoryRepository:
        return WatchHistoryRepository()

    # -------------------------------------------------------------------------
    # Singletons
    # -------------------------------------------------------------------------

    @cached_property
    def media_store(self) -> MediaStore:
        """Media store used for uploads; local disk by default."""
        return LocalMediaStore()

    @cached_property
    def edge_toggle(self) -> EdgeToggle:
        """Process-wide toggle, so its keyed lock covers every request."""
        return edge_toggle

    @cached_property
    def video_service(self) -> VideoService:
        return VideoService(
            video_repo=self.create_video_repository(),
            user_repo=self.create_user_repository(),
            playlist_repo=self.create_playlist_repository(),
            history_repo=self.create_watch_history_repository(),
            media_store=self.media_store,
        )

    @cached_property
    def comment_service(self) -> CommentService:
        return CommentService(
            comment_repo=self.create_comment_repository(),
            video_repo=self.create_video_repository(),
        )

    @cached_property
    def like_service(self) -> LikeService:
        return LikeService(
            like_repo=self.create_like_repository(),
            video_repo=self.create_video_repository(),
            comment_repo=self.create_comment_repository(),
            tweet_repo=self.create_tweet_repository(),
            toggle=self.edge_toggle,
        )

    @cached_property
    def subscription_service(self) -> SubscriptionService:
        return SubscriptionService(
            subscription_repo=self.create_subscription_repository(),
            user_repo=self.create_user_repository(),
            toggle=self.edge_toggle,
        )

    @cached_property
    def tweet_service(self) -> TweetService:
        return TweetService(
            tweet_repo=self.create_tweet_repository(),
            user_repo=self.create_user_repository(),
        )

    @cached_property
    def playlist_service(self) -> PlaylistService:
        return PlaylistService(
            playlist_repo=self.create_playlist_repository(),
            video_repo=self.create_video_repository(),
            user_repo=self.create_user_repository(),
        )

    @cached_property
    def user_service(self) -> UserService:
        return UserService(
            user_repo=self.create_user_repository(),
            history_repo=self.create_watch_history_repository(),
        )

    def override(self, name: str, value: Any) -> None:
        """
        Replace a cached singleton, e.g. the media store in tests.

        Services built before the override keep their old collaborator;
        call :meth:`reset` first when overriding a collaborator.
        """
        if name not in _CACHED:
            raise AttributeError(f"{name} is not a container singleton")
        self.__dict__[name] = value

    def reset(self) -> None:
        """Clear all cached singletons."""
        for prop in _CACHED:
            self.__dict__.pop(prop, None)


# Global container instance
container = Container()
