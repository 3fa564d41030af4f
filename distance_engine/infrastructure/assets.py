"""
Static asset loading and offline table generation.

``coordinates.json``  ``{"<name>": {"lat": float, "lon": float}, ...}``
``distances.json``    ``{"<origin>": {"<destination>": km, ...}, ...}``

Both ship inside the package (``distance_engine/data``) and may be
overridden by path.  ``extend_table`` is the offline generator used by
``seed.py``; the running engine never writes the table.
"""

from __future__ import annotations

import json
import logging
import os
from itertools import combinations
from pathlib import Path
from typing import Iterable, Optional

from distance_engine.domain.catalog import LocationCatalog
from distance_engine.domain.distance import haversine_km, round1
from distance_engine.domain.enrichment import DistanceProvider
from distance_engine.domain.entities import Coordinate

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
COORDINATES_FILE = DATA_DIR / "coordinates.json"
DISTANCES_FILE = DATA_DIR / "distances.json"


def _read_json(path: str | os.PathLike) -> dict:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at the top level")
    return data


def load_coordinates(path: str | os.PathLike = COORDINATES_FILE) -> dict[str, Coordinate]:
    raw = _read_json(path)
    return {
        name: Coordinate(name=name, lat=float(point["lat"]), lon=float(point["lon"]))
        for name, point in raw.items()
    }


def load_table(path: str | os.PathLike = DISTANCES_FILE) -> dict[str, dict[str, float]]:
    raw = _read_json(path)
    return {
        origin: {destination: float(km) for destination, km in row.items()}
        for origin, row in raw.items()
    }


def load_catalog(
    coordinates_path: Optional[str | os.PathLike] = None,
    distances_path: Optional[str | os.PathLike] = None,
) -> LocationCatalog:
    catalog = LocationCatalog(
        load_coordinates(coordinates_path or COORDINATES_FILE),
        load_table(distances_path or DISTANCES_FILE),
    )
    logger.info(
        "Loaded %d coordinates and %d precomputed pairs",
        catalog.coordinate_count,
        catalog.table_pair_count,
    )
    return catalog


def save_table(table: dict[str, dict[str, float]], path: str | os.PathLike) -> None:
    target = Path(path)
    tmp = target.with_name(f".{target.name}.tmp")
    tmp.write_text(
        json.dumps(table, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    os.replace(tmp, target)


async def extend_table(
    table: dict[str, dict[str, float]],
    names: Iterable[str],
    provider: Optional[DistanceProvider],
    catalog: LocationCatalog,
    region: Optional[str] = None,
) -> int:
    """Fill missing unordered pairs among *names* in place.

    The provider's driving distance is preferred; without it, rounded
    Haversine is used when both endpoints have coordinates.  Pairs neither
    source can answer are skipped.  Returns the number of pairs added.
    """
    added = 0
    for origin, destination in combinations(dict.fromkeys(names), 2):
        if destination in table.get(origin, {}) or origin in table.get(destination, {}):
            continue

        km = None
        if provider is not None:
            try:
                km = await provider.distance_km(origin, destination, region)
            except Exception:
                logger.exception(
                    "Distance provider %s raised for %s -> %s", provider.name, origin, destination
                )
        if km is None:
            a, b = catalog.coordinate(origin), catalog.coordinate(destination)
            if a is None or b is None:
                logger.info("Skipping %s -> %s: no provider result or coordinates", origin, destination)
                continue
            km = round1(haversine_km(a.lat, a.lon, b.lat, b.lon))

        table.setdefault(origin, {})[destination] = km
        added += 1
    return added
