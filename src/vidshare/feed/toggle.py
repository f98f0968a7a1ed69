"""
Edge toggle.

Turns an (actor, target) edge on or off: likes on videos, comments and
tweets, and subscriptions to channels all go through
:meth:`EdgeToggle.toggle`.

Two layers keep the read-then-write sequence safe:

* a :class:`KeyedLock` serializes toggles on the same key inside one
  process;
* the storage unique constraint rejects a second edge across processes.
  Stores raise :class:`~vidshare.exceptions.EdgeExistsError` for that
  case and the toggle re-reads and retries a bounded number of times.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.settings import settings
from vidshare.exceptions import ConflictError, EdgeExistsError

logger = logging.getLogger(__name__)


class ToggleAction(str, Enum):
    """Outcome of a toggle."""

    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class ToggleResult:
    """Result of :meth:`EdgeToggle.toggle`; ``edge`` is set when added."""

    action: ToggleAction
    edge: Any = None

    @property
    def added(self) -> bool:
        return self.action is ToggleAction.ADDED


class EdgeStore(Protocol):
    """Storage for one kind of edge."""

    kind: str

    async def find_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Any | None:
        """Return the edge if it exists."""
        ...

    async def insert_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Any:
        """Insert the edge; raise EdgeExistsError on a uniqueness violation."""
        ...

    async def delete_edge(self, session: AsyncSession, edge: Any) -> None:
        """Delete a previously found edge."""
        ...


class KeyedLock:
    """
    One asyncio lock per key, created on demand and dropped when idle.

    Examples
    --------
    >>> lock = KeyedLock()
    >>> async def work():
    ...     async with lock.hold(("like", "a", "b")):
    ...         ...
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class EdgeToggle:
    """
    Flip the existence of an edge.

    Parameters
    ----------
    retry_attempts : int | None
        Read-then-write attempts before giving up with ConflictError;
        defaults to ``settings.toggle_retry_attempts``.
    lock : KeyedLock | None
        Lock shared by every toggle that may touch the same keys.

    Raises
    ------
    ValueError
        If ``retry_attempts`` is below 1.
    """

    def __init__(
        self, retry_attempts: int | None = None, lock: KeyedLock | None = None
    ) -> None:
        if retry_attempts is None:
            retry_attempts = settings.toggle_retry_attempts
        if retry_attempts < 1:
            raise ValueError(f"retry_attempts must be at least 1, got {retry_attempts}")
        self.retry_attempts = retry_attempts
        self.lock = lock or KeyedLock()

    async def toggle(
        self,
        session: AsyncSession,
        store: EdgeStore,
        actor_id: str,
        target_id: str,
    ) -> ToggleResult:
        """
        Remove the edge if present, otherwise create it.

        Raises
        ------
        ConflictError
            If every attempt lost an insert race.
        """
        key = (store.kind, actor_id, target_id)
        async with self.lock.hold(key):
            for attempt in range(1, self.retry_attempts + 1):
                edge = await store.find_edge(session, actor_id, target_id)
                if edge is not None:
                    await store.delete_edge(session, edge)
                    return ToggleResult(action=ToggleAction.REMOVED)

                try:
                    edge = await store.insert_edge(session, actor_id, target_id)
                except EdgeExistsError:
                    logger.debug(
                        "Lost insert race on %s edge %s -> %s (attempt %d/%d)",
                        store.kind,
                        actor_id,
                        target_id,
                        attempt,
                        self.retry_attempts,
                    )
                    continue
                return ToggleResult(action=ToggleAction.ADDED, edge=edge)

        logger.warning(
            "Giving up toggling %s edge %s -> %s after %d attempts",
            store.kind,
            actor_id,
            target_id,
            self.retry_attempts,
        )
        raise ConflictError(
            message=f"Could not toggle {store.kind}: concurrent update, try again",
            details={"kind": store.kind, "target_id": target_id},
        )


# Shared by every service in the process so that toggles on the same key
# from different requests are serialized.
edge_toggle = EdgeToggle()
