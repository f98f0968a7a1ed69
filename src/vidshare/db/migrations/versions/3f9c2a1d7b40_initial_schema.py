"""initial_schema

Revision ID: 3f9c2a1d7b40
Revises:
Create Date: 2026-10-19 09:12:44.301562

"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "3f9c2a1d7b40"
down_revision = None
branch_labels = None
depends_on = None

ID = sa.String(32)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
    ]


def _owner(column: str = "owner_id") -> sa.Column:
    return sa.Column(
        column, ID, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def upgrade() -> None:
    """Create users, content tables and the edge tables between them."""
    op.create_table(
        "users",
        sa.Column("id", ID, primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "videos",
        sa.Column("id", ID, primary_key=True),
        _owner(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("video_url", sa.String(500), nullable=False),
        sa.Column("video_public_id", sa.String(255), nullable=False),
        sa.Column("thumbnail_url", sa.String(500), nullable=False),
        sa.Column("thumbnail_public_id", sa.String(255), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_videos_owner_created", "videos", ["owner_id", "created_at"])
    op.create_index(
        "ix_videos_published_created", "videos", ["is_published", "created_at"]
    )

    op.create_table(
        "comments",
        sa.Column("id", ID, primary_key=True),
        sa.Column(
            "video_id",
            ID,
            sa.ForeignKey("videos.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _owner(),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_comments_video_created", "comments", ["video_id", "created_at"]
    )

    op.create_table(
        "tweets",
        sa.Column("id", ID, primary_key=True),
        _owner(),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "likes",
        sa.Column("id", ID, primary_key=True),
        _owner("liked_by"),
        sa.Column("target_kind", sa.String(10), nullable=False),
        sa.Column("target_id", ID, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
        sa.UniqueConstraint(
            "liked_by", "target_kind", "target_id", name="uq_likes_actor_target"
        ),
        sa.CheckConstraint(
            "target_kind IN ('video', 'comment', 'tweet')",
            name="ck_likes_target_kind",
        ),
    )
    op.create_index("ix_likes_target", "likes", ["target_kind", "target_id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", ID, primary_key=True),
        _owner("subscriber_id"),
        _owner("channel_id"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
        sa.UniqueConstraint(
            "subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"
        ),
    )
    op.create_index("ix_subscriptions_channel", "subscriptions", ["channel_id"])

    op.create_table(
        "playlists",
        sa.Column("id", ID, primary_key=True),
        _owner(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "playlist_entries",
        sa.Column(
            "playlist_id",
            ID,
            sa.ForeignKey("playlists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "video_id",
            ID,
            sa.ForeignKey("videos.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "added_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
    )

    op.create_table(
        "watch_history",
        sa.Column("sequence", sa.Integer(), primary_key=True, autoincrement=True),
        _owner("user_id"),
        sa.Column(
            "video_id",
            ID,
            sa.ForeignKey("videos.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "watched_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=True,
        ),
        sa.UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table("watch_history")
    op.drop_table("playlist_entries")
    op.drop_table("playlists")
    op.drop_index("ix_subscriptions_channel", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index("ix_likes_target", table_name="likes")
    op.drop_table("likes")
    op.drop_table("tweets")
    op.drop_index("ix_comments_video_created", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_videos_published_created", table_name="videos")
    op.drop_index("ix_videos_owner_created", table_name="videos")
    op.drop_table("videos")
    op.drop_table("users")
