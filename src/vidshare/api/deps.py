"""FastAPI dependencies for API endpoints."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.database import db_manager
from vidshare.container import container
from vidshare.exceptions import AuthenticationError, InvalidReferenceError
from vidshare.feed.predicates import validate_reference
from vidshare.services import (
    CommentService,
    LikeService,
    PlaylistService,
    SubscriptionService,
    TweetService,
    UserService,
    VideoService,
)

# Header set by the upstream gateway after verifying the caller's token
ACTOR_HEADER = "X-User-Id"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields an async SQLAlchemy session that auto-commits on success
    and rolls back on exception.

    Yields
    ------
    AsyncSession
        An async SQLAlchemy session for database operations.
    """
    async for session in db_manager.get_session():
        yield session


async def get_actor_id(
    session: Annotated[AsyncSession, Depends(get_db)],
    x_user_id: Annotated[str | None, Header(alias=ACTOR_HEADER)] = None,
) -> str:
    """
    Dependency resolving the acting user.

    Token verification happens upstream; this only checks that the
    forwarded id is well formed and belongs to an existing user.

    Raises
    ------
    AuthenticationError
        401 if the header is missing, malformed or names no user.
    """
    if not x_user_id or not x_user_id.strip():
        raise AuthenticationError(message="Authentication required")
    try:
        actor_id = validate_reference(x_user_id, "user id")
    except InvalidReferenceError as e:
        raise AuthenticationError(message="Invalid user identity") from e

    if not await container.create_user_repository().exists(session, actor_id):
        raise AuthenticationError(message="Unknown user")
    return actor_id


def get_video_service() -> VideoService:
    return container.video_service


def get_comment_service() -> CommentService:
    return container.comment_service


def get_like_service() -> LikeService:
    return container.like_service


def get_subscription_service() -> SubscriptionService:
    return container.subscription_service


def get_tweet_service() -> TweetService:
    return container.tweet_service


def get_playlist_service() -> PlaylistService:
    return container.playlist_service


def get_user_service() -> UserService:
    return container.user_service


DbSession = Annotated[AsyncSession, Depends(get_db)]
ActorId = Annotated[str, Depends(get_actor_id)]
