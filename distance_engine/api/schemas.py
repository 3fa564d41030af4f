"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from distance_engine.domain.enums import DistanceSource


# ── Requests ──────────────────────────────────────────────────────────


class PairRequest(BaseModel):
    origin: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=200)


class BatchWarmRequest(BaseModel):
    pairs: list[PairRequest] = Field(..., min_length=1, max_length=500)


class OptionsUpdateRequest(BaseModel):
    enable_online: Optional[bool] = None
    cache_ttl_hours: Optional[float] = Field(None, ge=0)
    region_bias: Optional[str] = None
    prefer_embedded_client: Optional[bool] = None

    model_config = {"extra": "forbid"}


# ── Responses ─────────────────────────────────────────────────────────


class DistanceResponse(BaseModel):
    origin: str
    destination: str
    distance_km: Optional[float] = None
    source: DistanceSource


class WarmResponse(BaseModel):
    origin: str
    destination: str
    distance_km: Optional[float] = None


class BatchWarmResponse(BaseModel):
    scheduled: int
    skipped: int


class LocationsResponse(BaseModel):
    locations: list[str]


class LocationResponse(BaseModel):
    name: str
    known: bool
    has_coordinates: bool


class OptionsResponse(BaseModel):
    enable_online: bool
    cache_ttl_hours: float
    region_bias: str
    prefer_embedded_client: bool


class HealthResponse(BaseModel):
    status: str = "ok"
    cache_entries: int = 0
