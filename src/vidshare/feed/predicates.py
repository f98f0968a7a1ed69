"""
Predicate builder.

Validates raw identifiers before any storage access and produces filter
descriptors that only ever reference allow-listed fields. Descriptors are
plain dicts so they can be inspected in tests; ``where_clauses`` turns them
into SQLAlchemy predicates for the repository layer.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from sqlalchemy import ColumnElement

from vidshare.exceptions import BadRequestError, InvalidReferenceError

_REFERENCE_PATTERN = re.compile(r"^[0-9a-f]{32}$")

# Fields each collection may be filtered on. Anything else is rejected so a
# caller can never smuggle an arbitrary column (or operator) into a query.
ALLOWED_FILTER_FIELDS: dict[str, frozenset[str]] = {
    "users": frozenset({"id", "username"}),
    "videos": frozenset({"id", "owner_id", "is_published"}),
    "comments": frozenset({"id", "video_id", "owner_id"}),
    "tweets": frozenset({"id", "owner_id"}),
    "likes": frozenset({"liked_by", "target_kind", "target_id"}),
    "subscriptions": frozenset({"subscriber_id", "channel_id"}),
    "playlists": frozenset({"id", "owner_id"}),
    "playlist_entries": frozenset({"playlist_id", "video_id"}),
    "watch_history": frozenset({"user_id", "video_id"}),
}


def validate_reference(raw: object, kind: str = "id") -> str:
    """
    Validate and normalize an entity reference.

    Parameters
    ----------
    raw : object
        Value taken from a path, query or body parameter.
    kind : str
        Label used in the error message (e.g. "video id").

    Returns
    -------
    str
        The lowercased 32-character hex identifier.

    Raises
    ------
    InvalidReferenceError
        If the value is missing or not a well-formed identifier.

    Examples
    --------
    >>> validate_reference(" 0190F5A2C3D47E1A8B2C3D4E5F607182 ")
    '0190f5a2c3d47e1a8b2c3d4e5f607182'
    """
    if not isinstance(raw, str):
        raise InvalidReferenceError(kind=kind, value=raw)

    candidate = raw.strip().lower()
    if not _REFERENCE_PATTERN.match(candidate):
        raise InvalidReferenceError(kind=kind, value=raw)
    return candidate


def build_filter(collection: str, **fields: Any) -> dict[str, Any]:
    """
    Build a filter descriptor for ``collection``.

    ``None`` values are dropped, so optional parameters can be passed
    through unconditionally.

    Raises
    ------
    BadRequestError
        If the collection is unknown or a field is not filterable.

    Examples
    --------
    >>> build_filter("videos", owner_id="ab" * 16, is_published=None)
    {'owner_id': 'abababababababababababababababab'}
    """
    allowed = ALLOWED_FILTER_FIELDS.get(collection)
    if allowed is None:
        raise BadRequestError(
            message=f"Unknown collection: {collection}",
            details={"collection": collection},
        )

    rejected = sorted(name for name in fields if name not in allowed)
    if rejected:
        raise BadRequestError(
            message=f"Cannot filter {collection} by: {', '.join(rejected)}",
            details={"collection": collection, "fields": rejected},
        )

    return {name: value for name, value in fields.items() if value is not None}


def where_clauses(model: Any, descriptor: dict[str, Any]) -> list[ColumnElement[bool]]:
    """Translate a filter descriptor into equality predicates on ``model``."""
    return [getattr(model, name) == value for name, value in descriptor.items()]


def _coerce_reference(v: object) -> str:
    # pydantic only wraps ValueError into a field error
    try:
        return validate_reference(v)
    except InvalidReferenceError as exc:
        raise ValueError(exc.message) from exc


EntityId = Annotated[
    str,
    BeforeValidator(_coerce_reference),
    Field(description="Entity identifier (32 lowercase hex chars)"),
]
