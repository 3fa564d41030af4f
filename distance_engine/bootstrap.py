"""
Engine wiring: settings -> catalog, cache backend, providers, facade.

One engine is built per process and shared by reference; nothing here is
module-level state.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from distance_engine.config import Settings, settings as default_settings
from distance_engine.domain.cache import DistanceCache, KeyValueStore
from distance_engine.domain.enrichment import EnrichmentClient
from distance_engine.domain.engine import DistanceEngine
from distance_engine.domain.entities import ConfigurationError, EngineOptions
from distance_engine.infrastructure.assets import load_catalog
from distance_engine.infrastructure.providers import (
    EmbeddedClientProvider,
    RestDistanceMatrixProvider,
)
from distance_engine.infrastructure.storage import (
    FileStore,
    MemoryStore,
    RedisStore,
    SqlStore,
)

logger = logging.getLogger(__name__)


def build_store(cfg: Settings) -> KeyValueStore:
    backend = cfg.cache_backend
    if backend == "file":
        return FileStore(cfg.cache_dir)
    if backend == "redis":
        return RedisStore.from_url(cfg.redis_url)
    if backend == "sql":
        return SqlStore.from_url(cfg.database_url)
    if backend == "memory":
        return MemoryStore()
    raise ConfigurationError(f"Unknown cache backend: {backend!r}")


def build_engine(
    cfg: Optional[Settings] = None,
    *,
    store: Optional[KeyValueStore] = None,
    embedded_client: Any = None,
) -> DistanceEngine:
    """Assemble an engine.  Call ``await engine.load()`` before serving."""
    cfg = cfg or default_settings
    options = EngineOptions(
        enable_online=cfg.enable_online,
        cache_ttl_hours=cfg.cache_ttl_hours,
        region_bias=cfg.region_bias,
        prefer_embedded_client=cfg.prefer_embedded_client,
    )

    catalog = load_catalog(cfg.coordinates_path, cfg.distances_path)
    cache = DistanceCache(
        store or build_store(cfg),
        ttl_hours=options.cache_ttl_hours,
        storage_key=cfg.cache_storage_key,
    )

    embedded = (
        EmbeddedClientProvider(embedded_client, timeout=cfg.provider_timeout_seconds)
        if embedded_client is not None
        else None
    )
    rest = (
        RestDistanceMatrixProvider(
            cfg.google_maps_api_key,
            url=cfg.distance_matrix_url,
            timeout=cfg.provider_timeout_seconds,
        )
        if cfg.google_maps_api_key
        else None
    )
    enrichment = EnrichmentClient(cache, embedded=embedded, rest=rest)

    logger.info(
        "Distance engine built (backend=%s, online=%s, embedded=%s, rest=%s)",
        type(cache.store).__name__,
        options.enable_online,
        embedded is not None,
        rest is not None,
    )
    return DistanceEngine(catalog, cache, enrichment=enrichment, options=options)
