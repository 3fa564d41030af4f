"""
Great-circle distance using the Haversine formula.

The geodesic layer sits behind the cache and the precomputed table: it is
only reached when both endpoints have coordinates but no better source knows
the pair.  Straight-line distance under-reports road distance, which is why
enrichment results and table values take precedence.

Complexity: O(1) per call.
"""

import math

EARTH_RADIUS_KM = 6_371.0


def haversine_km(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def round1(value: float) -> float:
    """Round half-up to one decimal place (0.05 -> 0.1, not banker's rounding)."""
    return math.floor(value * 10 + 0.5) / 10
