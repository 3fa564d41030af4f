"""
FastAPI application factory.

* Builds and loads the distance engine (or uses one passed in) and starts /
  stops the background cache warmer via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from distance_engine.api.middleware import limiter
from distance_engine.api.routes import admin, distances, locations
from distance_engine.bootstrap import build_engine
from distance_engine.config import settings
from distance_engine.domain.engine import DistanceEngine
from distance_engine.workers.warmer import CacheWarmer

logging.basicConfig(level=logging.INFO)


def create_app(engine: Optional[DistanceEngine] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the engine and start the warmer on startup; stop on shutdown."""
        owned = engine is None
        app.state.engine = engine or build_engine(settings)
        app.state.warmer = CacheWarmer(
            app.state.engine, concurrency=settings.warmer_concurrency
        )
        try:
            await app.state.engine.load()
            await app.state.warmer.start()
            yield
        finally:
            await app.state.warmer.stop()
            if owned:
                await app.state.engine.aclose()

    app = FastAPI(
        title="Distance Resolution API",
        description=(
            "Answers how far apart two locations are using a cache, a "
            "precomputed table, great-circle math and a heuristic fallback, "
            "with optional Distance Matrix enrichment."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(distances.router, prefix="/api/v1")
    app.include_router(locations.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
