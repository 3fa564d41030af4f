"""
Location catalog: the Coordinate Store plus the Precomputed Distance Table.

Both are loaded once at startup and never mutated.  Names are matched
exactly (case-sensitive, no normalisation).

The table is stored asymmetrically (``table[origin][destination]``); lookups
try the forward direction first and then the reverse.  If both directions
are present with different values the forward one wins; no reconciliation
is attempted.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .entities import Coordinate

DistanceTable = Mapping[str, Mapping[str, float]]


class LocationCatalog:
    def __init__(
        self,
        coordinates: Mapping[str, Coordinate],
        table: DistanceTable,
    ):
        self._coordinates = dict(coordinates)
        self._table = {origin: dict(row) for origin, row in table.items()}
        self._known = frozenset(self._coordinates) | frozenset(self._table) | {
            destination for row in self._table.values() for destination in row
        }

    # ── Coordinate Store ──────────────────────────────────────────────

    def has_coordinates(self, name: str) -> bool:
        return name in self._coordinates

    def coordinate(self, name: str) -> Optional[Coordinate]:
        return self._coordinates.get(name)

    # ── Precomputed Table ─────────────────────────────────────────────

    def table_lookup(self, origin: str, destination: str) -> Optional[float]:
        """Return the tabulated km for the pair in either direction."""
        forward = self._table.get(origin, {}).get(destination)
        if forward is not None:
            return float(forward)
        reverse = self._table.get(destination, {}).get(origin)
        if reverse is not None:
            return float(reverse)
        return None

    @property
    def table(self) -> dict[str, dict[str, float]]:
        """Deep copy of the table, for offline generation tooling."""
        return {origin: dict(row) for origin, row in self._table.items()}

    # ── Known locations ───────────────────────────────────────────────

    def known_locations(self) -> list[str]:
        return sorted(self._known)

    def is_known(self, name: str) -> bool:
        if not name:
            return False
        return name in self._known

    @property
    def coordinate_count(self) -> int:
        return len(self._coordinates)

    @property
    def table_pair_count(self) -> int:
        return sum(len(row) for row in self._table.values())
