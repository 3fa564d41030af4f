"""
Seed script -- extends the precomputed distance table offline.

Usage:
    python seed.py Berlin Paris Vienna Prague
    python seed.py --all --output distance_engine/data/distances.json

For every unordered pair among the given locations that the table does not
cover yet, asks the Distance Matrix REST API (needs GOOGLE_MAPS_API_KEY) and
falls back to rounded Haversine when both ends have coordinates.
"""

import argparse
import asyncio
import logging
import sys

from distance_engine.config import settings
from distance_engine.infrastructure.assets import (
    DISTANCES_FILE,
    extend_table,
    load_catalog,
    save_table,
)
from distance_engine.infrastructure.providers import RestDistanceMatrixProvider

logger = logging.getLogger("seed")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extend the precomputed distance table.")
    parser.add_argument("locations", nargs="*", help="Location names to pair up")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Pair every location that has coordinates",
    )
    parser.add_argument(
        "--output",
        default=settings.distances_path or str(DISTANCES_FILE),
        help="Table file to write (default: the active distances table)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the provider and use Haversine only",
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    catalog = load_catalog(settings.coordinates_path, settings.distances_path)

    names = list(args.locations)
    if args.all:
        names += [n for n in catalog.known_locations() if catalog.has_coordinates(n)]
    if len(names) < 2:
        logger.error("Need at least two locations (or --all)")
        return 2

    provider = None
    if not args.offline and settings.google_maps_api_key:
        provider = RestDistanceMatrixProvider(
            settings.google_maps_api_key,
            url=settings.distance_matrix_url,
            timeout=settings.provider_timeout_seconds,
        )

    table = catalog.table
    try:
        added = await extend_table(table, names, provider, catalog, settings.region_bias)
    finally:
        if provider is not None:
            await provider.aclose()

    save_table(table, args.output)
    logger.info("Added %d pairs to %s", added, args.output)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main()))
