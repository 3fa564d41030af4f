"""
Background Cache Warmer
=======================

Fire-and-forget scheduling of ``warm_distance`` calls.

* ``schedule()`` is synchronous and never waits on the provider; it only
  enqueues the pair.
* A pair already queued or in flight (in either direction) is not queued
  again, so bursts of identical requests cost one provider call.
* ``concurrency`` worker tasks drain the queue.  A failing warm is logged
  and the worker moves on.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from distance_engine.domain.cache import pair_key
from distance_engine.domain.engine import DistanceEngine

logger = logging.getLogger(__name__)


class CacheWarmer:
    def __init__(self, engine: DistanceEngine, concurrency: int = 2):
        self.engine = engine
        self.concurrency = max(1, concurrency)
        self._queue: Optional[asyncio.Queue[tuple[str, str]]] = None
        self._pending: set[str] = set()
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    # ── Public API ────────────────────────────────────────────────────

    async def start(self) -> None:
        if self._tasks:
            return
        self._queue = asyncio.Queue()
        self._tasks = [
            asyncio.create_task(self._worker(i)) for i in range(self.concurrency)
        ]
        logger.info("Cache warmer started (workers=%d)", self.concurrency)

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self._queue = None
        self._pending.clear()
        logger.info("Cache warmer stopped")

    def schedule(self, origin: str, destination: str) -> bool:
        """Queue a pair for warming.  Returns False if it was not queued."""
        if self._queue is None or not origin or not destination:
            return False
        if pair_key(origin, destination) in self._pending or pair_key(destination, origin) in self._pending:
            return False
        self._pending.add(pair_key(origin, destination))
        self._queue.put_nowait((origin, destination))
        return True

    async def join(self) -> None:
        """Wait until every queued pair has been processed."""
        if self._queue is not None:
            await self._queue.join()

    # ── Internals ─────────────────────────────────────────────────────

    async def _worker(self, index: int) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            origin, destination = await queue.get()
            try:
                km = await self.engine.warm_distance(origin, destination)
                logger.debug("Worker %d warmed %s -> %s: %s", index, origin, destination, km)
            except Exception:
                logger.exception("Unhandled error warming %s -> %s", origin, destination)
            finally:
                self._pending.discard(pair_key(origin, destination))
                queue.task_done()
