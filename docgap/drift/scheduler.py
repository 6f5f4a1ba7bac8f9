"""Bounded-concurrency task scheduling for drift checks."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CONCURRENCY = 10


async def gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Like asyncio.gather, but the first failure cancels everything still running.

    Results keep the order of *aws*. Stragglers are awaited after
    cancellation so no task outlives the call.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [t for t in tasks if not t.done()]
        for t in pending:
            t.cancel()
        if pending:
            logger.debug("Cancelling %d in-flight task(s) after failure", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
        raise


class TaskScheduler:
    """Admits at most *concurrency* coroutines at a time, FIFO.

    Build one per run; the semaphore is the only state shared between tasks.
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.concurrency = concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self.in_flight = 0
        self.peak_in_flight = 0

    def _gate(self) -> asyncio.Semaphore:
        # Created lazily so the semaphore binds to the running loop
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.concurrency)
        return self._semaphore

    async def submit(self, factory: Callable[[], Awaitable[T]]) -> T:
        async with self._gate():
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                return await factory()
            finally:
                self.in_flight -= 1

    async def run(self, factories: Iterable[Callable[[], Awaitable[T]]]) -> list[T]:
        """Run every factory under the bound; results are in submission order."""
        return await gather_or_cancel(self.submit(f) for f in factories)
