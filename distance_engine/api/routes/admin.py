"""
Admin / observability endpoints
===============================

GET   /api/v1/admin/options -- current runtime options
PATCH /api/v1/admin/options -- adjust runtime options
GET   /api/v1/admin/health  -- simple health check
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from distance_engine.api.dependencies import get_engine
from distance_engine.api.middleware import limiter
from distance_engine.api.schemas import (
    HealthResponse,
    OptionsResponse,
    OptionsUpdateRequest,
)
from distance_engine.domain.engine import DistanceEngine
from distance_engine.domain.entities import ConfigurationError

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/options", response_model=OptionsResponse, summary="Current engine options")
@limiter.limit("100/minute")
async def get_options(
    request: Request,
    engine: DistanceEngine = Depends(get_engine),
):
    return OptionsResponse(**engine.options.to_dict())


@router.patch(
    "/options",
    response_model=OptionsResponse,
    summary="Update engine options",
    description="Only the fields present in the body are changed.",
)
@limiter.limit("100/minute")
async def update_options(
    request: Request,
    body: OptionsUpdateRequest,
    engine: DistanceEngine = Depends(get_engine),
):
    try:
        options = engine.configure(**body.model_dump(exclude_none=True))
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return OptionsResponse(**options.to_dict())


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(engine: DistanceEngine = Depends(get_engine)):
    return HealthResponse(cache_entries=len(engine.cache))
