"""Bounded concurrency for asynchronous work.

A sprite build runs two independent limiters, one across sprite tasks and
one across output file writes, so that saturating one level never starves
the other. Limiters are created per build and passed explicitly.
"""

import asyncio
import os
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, TypeVar

from svgmoji_sprites.constants import MIN_CONCURRENCY, RESERVED_CPUS

T = TypeVar("T")


def default_concurrency() -> int:
    """Number of concurrent units to admit on this machine.

    One core is left for the event loop driving the build.

    Returns:
        Detected CPU count minus one, never less than one.
    """
    cpu_count = os.cpu_count() or MIN_CONCURRENCY
    return max(MIN_CONCURRENCY, cpu_count - RESERVED_CPUS)


class ConcurrencyLimiter:
    """Admit at most ``limit`` awaitables at a time.

    Waiters are admitted in arrival order by the underlying semaphore.

    Attributes:
        name: Label used in log messages
        limit: Maximum number of concurrently admitted units
    """

    def __init__(self, limit: int | None = None, name: str = "limiter") -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum concurrency, defaults to ``default_concurrency()``
            name: Label used in log messages

        Raises:
            ValueError: If limit is less than one.
        """
        self.limit = default_concurrency() if limit is None else limit
        if self.limit < MIN_CONCURRENCY:
            raise ValueError(f"Concurrency limit must be at least {MIN_CONCURRENCY}")
        self.name = name
        self._semaphore = asyncio.Semaphore(self.limit)
        self._active = 0
        self._peak = 0

    @property
    def active(self) -> int:
        """Number of units currently admitted."""
        return self._active

    @property
    def peak(self) -> int:
        """Highest number of units admitted at the same time so far."""
        return self._peak

    async def __aenter__(self) -> "ConcurrencyLimiter":
        await self._semaphore.acquire()
        self._active += 1
        self._peak = max(self._peak, self._active)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._active -= 1
        self._semaphore.release()

    async def run(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``func(*args, **kwargs)`` once a slot is free.

        Args:
            func: Coroutine function to call
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            The awaited result of the function
        """
        async with self:
            return await func(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ConcurrencyLimiter(name={self.name!r}, limit={self.limit}, active={self._active})"


async def gather_fail_fast(tasks: list["asyncio.Task[T]"]) -> list[T]:
    """Wait for every task, stopping at the first failure.

    When a task fails, or the caller is cancelled, the remaining tasks are
    cancelled and awaited before the error is raised, so nothing keeps
    running behind the caller's back.

    Args:
        tasks: Tasks already scheduled on the running loop

    Returns:
        The task results, in task order
    """
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for pending in tasks:
            pending.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
