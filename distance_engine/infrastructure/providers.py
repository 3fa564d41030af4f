"""
Distance Matrix provider adapters.

``RestDistanceMatrixProvider``
    ``GET {url}?units=metric&origins=..&destinations=..&key=..[&region=..]``
    over ``httpx.AsyncClient``.  The API key comes from configuration and is
    never logged.

``EmbeddedClientProvider``
    Wraps an already-constructed, synchronous mapping SDK client exposing
    ``distance_matrix(origins, destinations, mode=..., units=..., region=...)``
    and returning the same payload shape as the REST endpoint (e.g.
    ``googlemaps.Client``).  The blocking call runs in a worker thread.

Both bound every call by the configured timeout and map every failure to
``None``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from distance_engine.domain.enrichment import DistanceProvider, parse_distance_matrix

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 8.0
DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


class RestDistanceMatrixProvider(DistanceProvider):
    name = "rest"

    def __init__(
        self,
        api_key: str,
        url: str = DISTANCE_MATRIX_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def distance_km(
        self, origin: str, destination: str, region: Optional[str] = None
    ) -> Optional[float]:
        if not self._api_key:
            return None

        params = {
            "units": "metric",
            "origins": origin,
            "destinations": destination,
            "key": self._api_key,
        }
        if region:
            params["region"] = region

        try:
            res = await self._client.get(self.url, params=params)
        except httpx.HTTPError as exc:
            logger.warning(
                "Distance Matrix request failed for %s -> %s: %s",
                origin, destination, type(exc).__name__,
            )
            return None

        if res.status_code != 200:
            logger.warning(
                "Distance Matrix returned HTTP %d for %s -> %s",
                res.status_code, origin, destination,
            )
            return None

        try:
            payload = res.json()
        except ValueError:
            logger.warning("Distance Matrix returned malformed JSON for %s -> %s", origin, destination)
            return None

        km = parse_distance_matrix(payload)
        if km is None:
            logger.warning("Distance Matrix had no route for %s -> %s", origin, destination)
        return km

    async def aclose(self) -> None:
        await self._client.aclose()


class EmbeddedClientProvider(DistanceProvider):
    name = "embedded"

    def __init__(self, client: Any, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.client = client
        self.timeout = timeout

    async def distance_km(
        self, origin: str, destination: str, region: Optional[str] = None
    ) -> Optional[float]:
        call = asyncio.to_thread(
            self.client.distance_matrix,
            [origin],
            [destination],
            mode="driving",
            units="metric",
            region=region or None,
        )
        try:
            payload = await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Embedded distance client timed out for %s -> %s", origin, destination)
            return None
        except Exception as exc:
            logger.warning(
                "Embedded distance client failed for %s -> %s: %s",
                origin, destination, exc,
            )
            return None
        return parse_distance_matrix(payload)
