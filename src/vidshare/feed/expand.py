"""
Join/expand resolver.

Helpers for attaching related data to feed queries: owner summaries from
an outer-joined ``users`` alias, correlated edge counts, and "has the
actor got an edge to this" flags.

Expansion is orphan tolerant: every related table is outer joined, so a
dangling reference yields a ``None`` summary or a zero count instead of
dropping the row or raising.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, Label, exists, false, func, select

from vidshare.api.schemas.common import OwnerSummary
from vidshare.db.models import Comment, Like, Subscription

OWNER_FIELDS = ("id", "username", "full_name", "avatar_url")


def owner_columns(alias: Any, prefix: str = "owner") -> list[Label[Any]]:
    """
    Labeled owner columns for a ``users`` alias.

    Examples
    --------
    >>> from sqlalchemy.orm import aliased
    >>> from vidshare.db.models import User
    >>> [c.name for c in owner_columns(aliased(User), prefix="channel")]
    ['channel_id', 'channel_username', 'channel_full_name', 'channel_avatar_url']
    """
    return [getattr(alias, name).label(f"{prefix}_{name}") for name in OWNER_FIELDS]


def owner_summary(row: Any, prefix: str = "owner") -> OwnerSummary | None:
    """
    Build an :class:`OwnerSummary` from a row selected with ``owner_columns``.

    Returns ``None`` when the outer join found no user.
    """
    mapping = row._mapping
    if mapping.get(f"{prefix}_id") is None:
        return None
    return OwnerSummary(
        **{name: mapping[f"{prefix}_{name}"] for name in OWNER_FIELDS}
    )


def edge_count(
    edge_model: Any, *conditions: ColumnElement[bool], label: str
) -> Label[int]:
    """Correlated scalar subquery counting ``edge_model`` rows matching ``conditions``."""
    return (
        select(func.count())
        .select_from(edge_model)
        .where(*conditions)
        .correlate_except(edge_model)
        .scalar_subquery()
        .label(label)
    )


def like_count(
    target_kind: str, target_id: ColumnElement[Any], label: str = "like_count"
) -> Label[int]:
    """Number of likes on the target referenced by ``target_id``."""
    return edge_count(
        Like, Like.target_kind == target_kind, Like.target_id == target_id, label=label
    )


def subscriber_count(
    channel_id: ColumnElement[Any], label: str = "subscriber_count"
) -> Label[int]:
    """Number of subscribers of the channel referenced by ``channel_id``."""
    return edge_count(Subscription, Subscription.channel_id == channel_id, label=label)


def comment_count(
    video_id: ColumnElement[Any], label: str = "comment_count"
) -> Label[int]:
    """Number of comments on the video referenced by ``video_id``."""
    return edge_count(Comment, Comment.video_id == video_id, label=label)


def has_edge(
    actor_id: str | None,
    actor_column: ColumnElement[Any],
    *conditions: ColumnElement[bool],
    label: str,
) -> Label[bool]:
    """
    Correlated EXISTS for an edge from ``actor_id``.

    An anonymous actor (``None``) never has an edge, so a constant false is
    selected instead of a subquery.
    """
    if actor_id is None:
        return false().label(label)
    return exists().where(actor_column == actor_id, *conditions).label(label)


def liked_by(
    actor_id: str | None,
    target_kind: str,
    target_id: ColumnElement[Any],
    label: str = "is_liked",
) -> Label[bool]:
    """Whether ``actor_id`` likes the referenced target."""
    return has_edge(
        actor_id,
        Like.liked_by,
        Like.target_kind == target_kind,
        Like.target_id == target_id,
        label=label,
    )


def subscribed_by(
    actor_id: str | None,
    channel_id: ColumnElement[Any],
    label: str = "is_subscribed",
) -> Label[bool]:
    """Whether ``actor_id`` is subscribed to the referenced channel."""
    return has_edge(
        actor_id,
        Subscription.subscriber_id,
        Subscription.channel_id == channel_id,
        label=label,
    )
