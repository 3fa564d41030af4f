"""
Distance Resolution Engine  (Facade)
====================================

Resolution order (first hit wins)
---------------------------------
0. Empty name              -> ``None``
1. ``origin == destination`` -> random local-delivery distance in [5, 32) km
2. Fresh cache entry (either direction)
3. Precomputed table (forward, then reverse)
4. Haversine, when both endpoints have coordinates (rounded to 0.1 km)
5. Heuristic regional estimate

Whatever layer answers, a value above ``MAX_PLAUSIBLE_KM`` (or below zero) is
reported as ``None``: such routes are never offered.

``resolve_distance`` does no I/O and never awaits.  ``warm_distance`` is the
only coroutine; it feeds the cache for later synchronous calls.

Complexity: a few dict look-ups and at most one trigonometric evaluation.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from .cache import DistanceCache
from .catalog import LocationCatalog
from .distance import haversine_km, round1
from .enrichment import EnrichmentClient, local_delivery_km
from .entities import ConfigurationError, EngineOptions, Resolution
from .enums import RESOLUTION_ORDER, DistanceSource
from .estimation import estimate_km

logger = logging.getLogger(__name__)

MAX_PLAUSIBLE_KM = 3500.0


class DistanceEngine:
    """High-level API used by the HTTP layer, the warmer and other callers."""

    def __init__(
        self,
        catalog: LocationCatalog,
        cache: DistanceCache,
        enrichment: Optional[EnrichmentClient] = None,
        options: Optional[EngineOptions] = None,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.cache = cache
        self._rng = rng or random.Random()
        self.enrichment = enrichment or EnrichmentClient(cache, rng=self._rng)
        self._options = options or EngineOptions()
        self.cache.ttl_hours = self._options.cache_ttl_hours

        self._layers: dict[DistanceSource, Callable[[str, str], Optional[float]]] = {
            DistanceSource.CACHE: self.cache.lookup,
            DistanceSource.TABLE: self.catalog.table_lookup,
            DistanceSource.GEODESIC: self._geodesic,
            DistanceSource.ESTIMATE: self._estimate,
        }

    # ── Lifecycle ─────────────────────────────────────────────────────

    async def load(self) -> None:
        await self.cache.load()

    async def aclose(self) -> None:
        await self.enrichment.aclose()
        await self.cache.store.close()

    # ── Configuration ─────────────────────────────────────────────────

    @property
    def options(self) -> EngineOptions:
        return self._options

    def configure(self, **options) -> EngineOptions:
        """Update runtime options; unknown names or bad types raise."""
        unknown = set(options) - set(EngineOptions.field_names())
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        merged = {**self._options.to_dict(), **options}
        self._options = EngineOptions(**merged)
        self.cache.ttl_hours = self._options.cache_ttl_hours
        logger.info("Engine options updated: %s", options)
        return self._options

    # ── Synchronous resolution ────────────────────────────────────────

    def explain(self, origin: str, destination: str) -> Resolution:
        if not origin or not destination:
            return Resolution(None, DistanceSource.NONE)

        if origin == destination:
            return Resolution(local_delivery_km(self._rng), DistanceSource.IDENTITY)

        for source in RESOLUTION_ORDER:
            km = self._layers[source](origin, destination)
            if km is None:
                continue
            if not 0 <= km <= MAX_PLAUSIBLE_KM:
                logger.debug(
                    "Discarding implausible %s distance %s -> %s (%.1f km)",
                    source.value, origin, destination, km,
                )
                return Resolution(None, source)
            return Resolution(km, source)

        return Resolution(None, DistanceSource.NONE)

    def resolve_distance(self, origin: str, destination: str) -> Optional[float]:
        return self.explain(origin, destination).km

    def _geodesic(self, origin: str, destination: str) -> Optional[float]:
        km = self.haversine_distance(origin, destination)
        return round1(km) if km is not None else None

    def _estimate(self, origin: str, destination: str) -> float:
        return estimate_km(origin, destination, self._rng)

    def haversine_distance(self, origin: str, destination: str) -> Optional[float]:
        """Unrounded great-circle km, or ``None`` without both coordinates."""
        a = self.catalog.coordinate(origin)
        b = self.catalog.coordinate(destination)
        if a is None or b is None:
            return None
        return haversine_km(a.lat, a.lon, b.lat, b.lon)

    # ── Asynchronous enrichment ───────────────────────────────────────

    async def warm_distance(self, origin: str, destination: str) -> Optional[float]:
        return await self.enrichment.warm(origin, destination, self._options)

    # ── Known locations ───────────────────────────────────────────────

    def list_known_locations(self) -> list[str]:
        return self.catalog.known_locations()

    def location_is_known(self, name: str) -> bool:
        return self.catalog.is_known(name)
