"""
Distance endpoints
==================

GET  /api/v1/distances?origin=..&destination=.. -- synchronous resolution
POST /api/v1/distances/warm                     -- enrich one pair now
POST /api/v1/distances/warm/batch               -- queue pairs for the warmer (202)
"""

from fastapi import APIRouter, Depends, Query, Request

from distance_engine.api.dependencies import get_engine, get_warmer
from distance_engine.api.middleware import limiter
from distance_engine.api.schemas import (
    BatchWarmRequest,
    BatchWarmResponse,
    DistanceResponse,
    PairRequest,
    WarmResponse,
)
from distance_engine.domain.engine import DistanceEngine
from distance_engine.workers.warmer import CacheWarmer

router = APIRouter(prefix="/distances", tags=["distances"])


@router.get(
    "",
    response_model=DistanceResponse,
    summary="Resolve the distance between two locations",
    description=(
        "Cache, precomputed table, Haversine, then heuristic estimate. "
        "`distance_km` is null when no plausible distance exists."
    ),
)
@limiter.limit("100/minute")
async def get_distance(
    request: Request,
    origin: str = Query(..., max_length=200),
    destination: str = Query(..., max_length=200),
    engine: DistanceEngine = Depends(get_engine),
):
    resolution = engine.explain(origin, destination)
    return DistanceResponse(
        origin=origin,
        destination=destination,
        distance_km=resolution.km,
        source=resolution.source,
    )


@router.post(
    "/warm",
    response_model=WarmResponse,
    summary="Fetch a provider distance and cache it",
)
@limiter.limit("100/minute")
async def warm_distance(
    request: Request,
    body: PairRequest,
    engine: DistanceEngine = Depends(get_engine),
):
    km = await engine.warm_distance(body.origin, body.destination)
    return WarmResponse(origin=body.origin, destination=body.destination, distance_km=km)


@router.post(
    "/warm/batch",
    status_code=202,
    response_model=BatchWarmResponse,
    summary="Queue pairs for background warming",
    responses={202: {"description": "Pairs accepted; warming is async."}},
)
@limiter.limit("100/minute")
async def warm_batch(
    request: Request,
    body: BatchWarmRequest,
    warmer: CacheWarmer = Depends(get_warmer),
):
    scheduled = sum(warmer.schedule(p.origin, p.destination) for p in body.pairs)
    return BatchWarmResponse(scheduled=scheduled, skipped=len(body.pairs) - scheduled)
