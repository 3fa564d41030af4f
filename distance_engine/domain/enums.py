"""Domain enumerations."""

import enum


class DistanceSource(str, enum.Enum):
    """Which resolution layer produced a distance."""

    IDENTITY = "IDENTITY"
    CACHE = "CACHE"
    TABLE = "TABLE"
    GEODESIC = "GEODESIC"
    ESTIMATE = "ESTIMATE"
    NONE = "NONE"


# Resolution precedence for non-identical endpoints, first hit wins.
RESOLUTION_ORDER: tuple[DistanceSource, ...] = (
    DistanceSource.CACHE,
    DistanceSource.TABLE,
    DistanceSource.GEODESIC,
    DistanceSource.ESTIMATE,
)


class RegionBucket(str, enum.Enum):
    """Coarse regional classification used by the heuristic estimator."""

    DOMESTIC = "DOMESTIC"
    INTERNATIONAL = "INTERNATIONAL"
