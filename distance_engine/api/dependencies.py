"""FastAPI dependency injection helpers."""

from fastapi import Request

from distance_engine.domain.engine import DistanceEngine
from distance_engine.workers.warmer import CacheWarmer


def get_engine(request: Request) -> DistanceEngine:
    """Return the process-wide engine built in the app lifespan."""
    return request.app.state.engine


def get_warmer(request: Request) -> CacheWarmer:
    return request.app.state.warmer
