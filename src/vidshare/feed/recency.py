"""
Move-to-front recency list.

Backs the watch history: the most recently viewed item is always first,
an item appears at most once, and the list never grows past its cap.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def move_to_front(history: Sequence[T], item: T, max_length: int) -> list[T]:
    """
    Return ``history`` with ``item`` moved (or added) to the front.

    Parameters
    ----------
    history : Sequence[T]
        Current list, most recent first.
    item : T
        Item just viewed.
    max_length : int
        Cap on the resulting list; older items beyond it are dropped.

    Returns
    -------
    list[T]
        A new list; ``history`` is not modified.

    Raises
    ------
    ValueError
        If ``max_length`` is smaller than 1.

    Examples
    --------
    >>> move_to_front(["b", "a"], "a", max_length=200)
    ['a', 'b']
    >>> move_to_front(["b", "a"], "c", max_length=2)
    ['c', 'b']
    """
    if max_length < 1:
        raise ValueError(f"max_length must be at least 1, got {max_length}")

    updated = [item]
    updated.extend(existing for existing in history if existing != item)
    return updated[:max_length]
