"""
Distance Cache
==============

In-memory shadow of a durable key-value snapshot.

* **Bidirectional** -- ``put(a, b)`` stores ``pair_key(a, b)`` *and*
  ``pair_key(b, a)`` pointing to the same entry, so reads in either
  direction are O(1).
* **TTL** -- entries older than the TTL are skipped by readers but never
  evicted; a later ``put`` simply overwrites them.
* **Write-through** -- every ``put`` flushes the full snapshot to the
  backing ``KeyValueStore``.  Flush failures are logged and swallowed; the
  in-memory state stays authoritative for the rest of the process.

Snapshot layout::

    {"<A>__|__<B>": {"km": 878.0, "ts": 1718000000000}, ...}
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .distance import round1
from .entities import CacheEntry

logger = logging.getLogger(__name__)

PAIR_SEPARATOR = "__|__"
DEFAULT_STORAGE_KEY = "distanceCacheV1"


def pair_key(a: str, b: str) -> str:
    """Order-dependent key; the cache stores both orders."""
    return f"{a}{PAIR_SEPARATOR}{b}"


def now_ms() -> int:
    return int(time.time() * 1000)


# ── Persistence surface ───────────────────────────────────────────────


class KeyValueStore(ABC):
    """Durable string key-value storage backing the cache snapshot."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    async def close(self) -> None:
        return None


# ── Cache ─────────────────────────────────────────────────────────────


class DistanceCache:
    def __init__(
        self,
        store: KeyValueStore,
        ttl_hours: float = 14 * 24,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
    ):
        self.store = store
        self.ttl_hours = ttl_hours
        self.storage_key = storage_key
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._flush_lock = asyncio.Lock()

    @property
    def ttl_ms(self) -> float:
        return self.ttl_hours * 3600 * 1000

    def __len__(self) -> int:
        return len(self._entries)

    # ── Startup ───────────────────────────────────────────────────────

    async def load(self) -> int:
        """Replace the in-memory shadow with the persisted snapshot.

        A missing, unreadable or malformed snapshot yields an empty cache.
        Returns the number of entries loaded.
        """
        try:
            raw = await self.store.get(self.storage_key)
        except Exception as exc:
            logger.warning("Could not read distance cache snapshot: %s", exc)
            raw = None

        self._entries = self._decode(raw) if raw else {}
        logger.info("Distance cache loaded (%d entries)", len(self._entries))
        return len(self._entries)

    @staticmethod
    def _decode(raw: str) -> dict[str, CacheEntry]:
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Distance cache snapshot is not valid JSON; starting empty")
            return {}
        if not isinstance(data, dict):
            logger.warning("Distance cache snapshot has unexpected shape; starting empty")
            return {}

        entries: dict[str, CacheEntry] = {}
        for key, value in data.items():
            if not isinstance(value, dict):
                continue
            km, ts = value.get("km"), value.get("ts")
            if not _is_number(km) or not _is_number(ts):
                continue
            entries[key] = CacheEntry(km=float(km), ts=int(ts))
        return entries

    # ── Reads ─────────────────────────────────────────────────────────

    def get(self, a: str, b: str) -> Optional[CacheEntry]:
        """Return the fresh entry for the pair in either direction, if any."""
        now = self._clock()
        ttl = self.ttl_ms
        for key in (pair_key(a, b), pair_key(b, a)):
            entry = self._entries.get(key)
            if entry is not None and now - entry.ts <= ttl:
                return entry
        return None

    def lookup(self, a: str, b: str) -> Optional[float]:
        entry = self.get(a, b)
        return entry.km if entry is not None else None

    # ── Writes ────────────────────────────────────────────────────────

    async def put(self, a: str, b: str, km: float) -> CacheEntry:
        entry = CacheEntry(km=round1(km), ts=self._clock())
        self._entries[pair_key(a, b)] = entry
        self._entries[pair_key(b, a)] = entry
        await self._flush()
        return entry

    async def _flush(self) -> None:
        async with self._flush_lock:
            snapshot = json.dumps(
                {key: entry.to_dict() for key, entry in self._entries.items()}
            )
            try:
                await self.store.set(self.storage_key, snapshot)
            except Exception as exc:
                logger.warning(
                    "Distance cache flush failed (%s); keeping in-memory state only",
                    exc,
                )


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
