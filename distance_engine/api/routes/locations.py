"""
Location endpoints
==================

GET /api/v1/locations        -- every known location name
GET /api/v1/locations/{name} -- whether a name is known / has coordinates
"""

from fastapi import APIRouter, Depends, Request

from distance_engine.api.dependencies import get_engine
from distance_engine.api.middleware import limiter
from distance_engine.api.schemas import LocationResponse, LocationsResponse
from distance_engine.domain.engine import DistanceEngine

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=LocationsResponse, summary="List known locations")
@limiter.limit("100/minute")
async def list_locations(
    request: Request,
    engine: DistanceEngine = Depends(get_engine),
):
    return LocationsResponse(locations=engine.list_known_locations())


@router.get("/{name}", response_model=LocationResponse, summary="Look up a location")
@limiter.limit("100/minute")
async def get_location(
    request: Request,
    name: str,
    engine: DistanceEngine = Depends(get_engine),
):
    return LocationResponse(
        name=name,
        known=engine.location_is_known(name),
        has_coordinates=engine.catalog.has_coordinates(name),
    )
