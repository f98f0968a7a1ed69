"""
Database models for vidshare.

This module contains SQLAlchemy models for the social graph: users and the
content they own (videos, comments, tweets, playlists) plus the edge tables
(likes, subscriptions, playlist entries, watch history) that connect them.
"""

from __future__ import annotations

import datetime
import uuid
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from uuid_utils import uuid7

ID_LENGTH = 32

LIKE_TARGET_KINDS = ("video", "comment", "tweet")


def new_id() -> str:
    """Generate a time-ordered 32-char hex identifier (UUIDv7)."""
    return uuid.UUID(bytes=uuid7().bytes).hex


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class User(Base):
    """Platform user; doubles as a channel for subscriptions."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500))

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    videos: Mapped[list["Video"]] = relationship(
        "Video", back_populates="owner", passive_deletes=True
    )
    playlists: Mapped[list["Playlist"]] = relationship(
        "Playlist", back_populates="owner", passive_deletes=True
    )


class Video(Base):
    """Published (or draft) video with its media references."""

    __tablename__ = "videos"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    # Foreign key
    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Video metadata
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    duration: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Media references (URL served to clients, public id for deletion)
    video_url: Mapped[str] = mapped_column(String(500), nullable=False)
    video_public_id: Mapped[str] = mapped_column(String(255), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail_public_id: Mapped[str] = mapped_column(String(255), nullable=False)

    # Engagement and visibility
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="videos")
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="video", passive_deletes=True
    )

    __table_args__ = (
        Index("ix_videos_owner_created", "owner_id", "created_at"),
        Index("ix_videos_published_created", "is_published", "created_at"),
    )


class Comment(Base):
    """Comment left by a user on a video."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    video: Mapped["Video"] = relationship("Video", back_populates="comments")

    __table_args__ = (Index("ix_comments_video_created", "video_id", "created_at"),)


class Tweet(Base):
    """Short text post owned by a user."""

    __tablename__ = "tweets"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Like(Base):
    """Like edge from a user to exactly one video, comment or tweet.

    The target is polymorphic (``target_kind`` + ``target_id``), so there is
    no foreign key on the target; dependents are removed explicitly when a
    target is deleted.
    """

    __tablename__ = "likes"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    liked_by: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    target_kind: Mapped[str] = mapped_column(String(10), nullable=False)
    target_id: Mapped[str] = mapped_column(String(ID_LENGTH), nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "liked_by", "target_kind", "target_id", name="uq_likes_actor_target"
        ),
        CheckConstraint(
            "target_kind IN ('video', 'comment', 'tweet')",
            name="ck_likes_target_kind",
        ),
        Index("ix_likes_target", "target_kind", "target_id"),
    )


class Subscription(Base):
    """Subscription edge from a subscriber user to a channel user."""

    __tablename__ = "subscriptions"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    subscriber_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"
        ),
        Index("ix_subscriptions_channel", "channel_id"),
    )


class Playlist(Base):
    """User-curated ordered set of videos."""

    __tablename__ = "playlists"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)

    owner_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Timestamps
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="playlists")
    entries: Mapped[list["PlaylistEntry"]] = relationship(
        "PlaylistEntry",
        back_populates="playlist",
        order_by="PlaylistEntry.position",
        cascade="all, delete-orphan",
    )


class PlaylistEntry(Base):
    """Membership of a video in a playlist; the composite key forbids duplicates."""

    __tablename__ = "playlist_entries"

    # Composite primary key
    playlist_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("playlists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)
    added_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    playlist: Mapped["Playlist"] = relationship("Playlist", back_populates="entries")


class WatchHistoryEntry(Base):
    """One video in a user's watch history.

    Ordering is by the autoincrement ``sequence`` descending: re-watching a
    video deletes its row and inserts a new one at the head.
    """

    __tablename__ = "watch_history"

    sequence: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
        {"sqlite_autoincrement": True},
    )


# Export all models
__all__ = [
    "Base",
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Like",
    "Subscription",
    "Playlist",
    "PlaylistEntry",
    "WatchHistoryEntry",
    "LIKE_TARGET_KINDS",
    "ID_LENGTH",
    "new_id",
]
