"""Centralised engine settings loaded from environment / .env file."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Runtime options (initial values; adjustable later via configure())
    enable_online: bool = False
    cache_ttl_hours: float = 14 * 24
    region_bias: str = "eu"
    prefer_embedded_client: bool = True

    # Distance Matrix provider
    google_maps_api_key: Optional[str] = None
    distance_matrix_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    provider_timeout_seconds: float = 8.0

    # Cache persistence
    cache_backend: Literal["file", "redis", "sql", "memory"] = "file"
    cache_dir: str = ".distance_cache"
    cache_storage_key: str = "distanceCacheV1"
    redis_url: str = "redis://localhost:6379/0"
    database_url: str = "sqlite+aiosqlite:///./distance_cache.db"

    # Static assets (None -> packaged JSON)
    coordinates_path: Optional[str] = None
    distances_path: Optional[str] = None

    # Background warmer
    warmer_concurrency: int = 2

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
