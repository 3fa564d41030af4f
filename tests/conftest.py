"""
Shared test fixtures.

Everything runs in-process: a small hand-built catalog instead of the
packaged assets, ``MemoryStore`` instead of disk / Redis / SQL, a fake
millisecond clock, a seeded RNG and stub providers instead of the network.
"""

import random
from typing import Optional

import pytest

from distance_engine.domain.cache import DistanceCache
from distance_engine.domain.catalog import LocationCatalog
from distance_engine.domain.engine import DistanceEngine
from distance_engine.domain.enrichment import DistanceProvider, EnrichmentClient
from distance_engine.domain.entities import Coordinate, EngineOptions
from distance_engine.infrastructure.storage import MemoryStore

HOUR_MS = 3600 * 1000

COORDINATES = {
    "Frankfurt": Coordinate("Frankfurt", 50.1109, 8.6821),
    "Munich": Coordinate("Munich", 48.1351, 11.5820),
    "Paris": Coordinate("Paris", 48.8566, 2.3522),
    "Berlin": Coordinate("Berlin", 52.5200, 13.4050),
    # 36 degrees of longitude on the equator: ~4003 km apart
    "Null Island": Coordinate("Null Island", 0.0, 0.0),
    "Far East": Coordinate("Far East", 0.0, 36.0),
}

TABLE = {
    "Frankfurt": {"Munich": 392, "Luxembourg": 248},
}


# ── Helpers ───────────────────────────────────────────────────────────


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance_hours(self, hours: float) -> None:
        self.now += int(hours * HOUR_MS)


class StubProvider(DistanceProvider):
    """Returns a fixed km (or raises) and records every call."""

    def __init__(self, km: Optional[float] = None, exc: Optional[Exception] = None, name: str = "stub"):
        self.km = km
        self.exc = exc
        self.name = name
        self.calls: list[tuple[str, str, Optional[str]]] = []
        self.closed = False

    async def distance_km(self, origin, destination, region=None):
        self.calls.append((origin, destination, region))
        if self.exc is not None:
            raise self.exc
        return self.km

    async def aclose(self):
        self.closed = True


class FailingStore(MemoryStore):
    """Accepts reads, rejects every write (e.g. quota exceeded)."""

    async def set(self, key, value):
        raise OSError("quota exceeded")


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def catalog() -> LocationCatalog:
    return LocationCatalog(COORDINATES, TABLE)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def cache(store, clock) -> DistanceCache:
    return DistanceCache(store, ttl_hours=336, clock=clock)


@pytest.fixture
def rest_provider() -> StubProvider:
    return StubProvider(km=878.0, name="rest")


@pytest.fixture
def engine(catalog, cache, rest_provider) -> DistanceEngine:
    rng = random.Random(1234)
    enrichment = EnrichmentClient(cache, rest=rest_provider, rng=rng)
    return DistanceEngine(
        catalog,
        cache,
        enrichment=enrichment,
        options=EngineOptions(enable_online=True),
        rng=rng,
    )
