"""
Lookup and ownership checks shared by the services.
"""

from __future__ import annotations

from typing import Optional, TypeVar

from vidshare.exceptions import NotFoundError, UnauthorizedError

T = TypeVar("T")


def ensure_found(obj: Optional[T], resource_type: str, identifier: str) -> T:
    """Return ``obj`` or raise NotFoundError when it is None."""
    if obj is None:
        raise NotFoundError(resource_type=resource_type, identifier=identifier)
    return obj


def ensure_owner(
    owner_id: str, actor_id: str, resource_type: str, identifier: str
) -> None:
    """Raise UnauthorizedError unless ``actor_id`` owns the resource."""
    if owner_id != actor_id:
        raise UnauthorizedError(resource_type=resource_type, identifier=identifier)
