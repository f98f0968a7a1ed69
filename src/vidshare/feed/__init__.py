"""
Relational feed aggregator.

The building blocks every feed and toggle endpoint is composed from:
reference validation and filter descriptors, edge toggling, owner/count
expansion, pagination, and the move-to-front recency list.
"""

from __future__ import annotations

from vidshare.feed.pagination import Page, PageRequest, SortSpec, build_page, paginate
from vidshare.feed.predicates import (
    ALLOWED_FILTER_FIELDS,
    EntityId,
    build_filter,
    validate_reference,
    where_clauses,
)
from vidshare.feed.recency import move_to_front
from vidshare.feed.toggle import EdgeStore, EdgeToggle, KeyedLock, ToggleResult

__all__ = [
    "ALLOWED_FILTER_FIELDS",
    "EdgeStore",
    "EdgeToggle",
    "EntityId",
    "KeyedLock",
    "Page",
    "PageRequest",
    "SortSpec",
    "ToggleResult",
    "build_filter",
    "build_page",
    "move_to_front",
    "paginate",
    "validate_reference",
    "where_clauses",
]
