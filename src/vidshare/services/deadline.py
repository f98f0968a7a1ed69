"""
Deadlines for storage-bound operations.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from vidshare.config.settings import settings
from vidshare.exceptions import StorageTimeoutError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def with_deadline(
    operation: str | None = None, timeout: float | None = None
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Bound the run time of an async operation.

    Parameters
    ----------
    operation : str | None
        Name reported in the error; defaults to the function's qualified name.
    timeout : float | None
        Seconds allowed; defaults to ``settings.storage_timeout_seconds``,
        read at call time.

    Raises
    ------
    StorageTimeoutError
        When the operation does not finish in time. The operation is
        cancelled, so the surrounding transaction is rolled back.

    Examples
    --------
    >>> @with_deadline("video.publish")
    ... async def publish() -> None:
    ...     ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        name = operation or func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            seconds = timeout if timeout is not None else settings.storage_timeout_seconds
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=seconds)
            except asyncio.TimeoutError as e:
                logger.error("Operation %s exceeded %ss deadline", name, seconds)
                raise StorageTimeoutError(operation=name, timeout=seconds) from e

        return wrapper

    return decorator
