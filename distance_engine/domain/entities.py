"""
Domain value objects.

- ``Coordinate`` and ``CacheEntry`` are immutable; a fresher cache entry
  replaces an old one rather than mutating it.
- ``EngineOptions`` validates its own field types so that configuration
  mistakes surface at ``configure()`` time, never during resolution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Optional

from .enums import DistanceSource


class ConfigurationError(ValueError):
    """Raised when runtime engine options are invalid."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class CacheEntry:
    km: float
    ts: int  # unix epoch ms

    def to_dict(self) -> dict:
        return {"km": self.km, "ts": self.ts}


@dataclass(frozen=True)
class Resolution:
    km: Optional[float]
    source: DistanceSource


# ── Options ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EngineOptions:
    enable_online: bool = False
    cache_ttl_hours: float = 14 * 24
    region_bias: str = "eu"
    prefer_embedded_client: bool = True

    def __post_init__(self) -> None:
        for name in ("enable_online", "prefer_embedded_client"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a bool")
        ttl = self.cache_ttl_hours
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
            raise ConfigurationError("cache_ttl_hours must be a number")
        if not math.isfinite(ttl) or ttl < 0:
            raise ConfigurationError("cache_ttl_hours must be a finite, non-negative number")
        if not isinstance(self.region_bias, str):
            raise ConfigurationError("region_bias must be a string")

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.field_names()}
