"""
Online enrichment  (Strategy Pattern)
=====================================

Resolves an authoritative driving distance from a mapping provider and
writes it into the ``DistanceCache`` so later synchronous resolutions pick
it up.  Never called from the synchronous path.

Providers
---------
* ``embedded`` -- adapter around an already-constructed mapping SDK client.
  Tried first when ``prefer_embedded_client`` is on.
* ``rest``     -- direct HTTP call to the Distance Matrix endpoint.

Both return ``None`` for every expected failure (transport, status,
malformed payload); the client moves on to the next provider and, if none
succeeds, resolves to ``None`` without touching the cache.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Optional

from .cache import DistanceCache
from .distance import round1
from .entities import EngineOptions

logger = logging.getLogger(__name__)

LOCAL_DELIVERY_RANGE_KM = (5, 32)


class DistanceProvider(ABC):
    name: str = "provider"

    @abstractmethod
    async def distance_km(
        self, origin: str, destination: str, region: Optional[str] = None
    ) -> Optional[float]: ...

    async def aclose(self) -> None:
        return None


def parse_distance_matrix(payload: Any) -> Optional[float]:
    """Extract the first element's driving distance, in km (1 dp)."""
    if not isinstance(payload, dict):
        return None
    status = payload.get("status")
    if status is not None and status != "OK":
        return None
    try:
        element = payload["rows"][0]["elements"][0]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(element, dict) or element.get("status") != "OK":
        return None

    distance = element.get("distance")
    meters = distance.get("value") if isinstance(distance, dict) else None
    if isinstance(meters, bool) or not isinstance(meters, (int, float)) or meters <= 0:
        return None
    return round1(meters / 1000)


def local_delivery_km(rng: random.Random) -> float:
    low, high = LOCAL_DELIVERY_RANGE_KM
    return float(rng.randrange(low, high))


class EnrichmentClient:
    def __init__(
        self,
        cache: DistanceCache,
        embedded: Optional[DistanceProvider] = None,
        rest: Optional[DistanceProvider] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cache = cache
        self.embedded = embedded
        self.rest = rest
        self._rng = rng or random.Random()

    def providers_for(self, options: EngineOptions) -> list[DistanceProvider]:
        chain: list[DistanceProvider] = []
        if options.prefer_embedded_client and self.embedded is not None:
            chain.append(self.embedded)
        if self.rest is not None:
            chain.append(self.rest)
        return chain

    async def warm(
        self, origin: str, destination: str, options: EngineOptions
    ) -> Optional[float]:
        if not options.enable_online:
            return None
        if not origin or not destination:
            return None

        if origin == destination:
            entry = await self.cache.put(origin, destination, local_delivery_km(self._rng))
            return entry.km

        providers = self.providers_for(options)
        if not providers:
            logger.debug("No distance provider configured; skipping %s -> %s", origin, destination)
            return None

        for provider in providers:
            try:
                km = await provider.distance_km(origin, destination, options.region_bias)
            except Exception:
                logger.exception("Distance provider %s raised", provider.name)
                continue
            if km is not None:
                entry = await self.cache.put(origin, destination, km)
                logger.info(
                    "Warmed %s -> %s = %.1f km via %s", origin, destination, entry.km, provider.name
                )
                return entry.km

        logger.warning("Could not enrich %s -> %s", origin, destination)
        return None

    async def aclose(self) -> None:
        for provider in (self.embedded, self.rest):
            if provider is not None:
                await provider.aclose()
