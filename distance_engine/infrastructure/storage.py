"""
Key-value persistence backends for the distance cache snapshot.

* ``MemoryStore`` -- process-local dict; nothing survives a restart.
* ``FileStore``   -- one JSON file per key, replaced atomically
  (temp file in the same directory + ``os.replace``).
* ``RedisStore``  -- ``redis.asyncio`` client.
* ``SqlStore``    -- ``kv_store`` table through async SQLAlchemy.
"""

from __future__ import annotations

import asyncio
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncEngine

from distance_engine.domain.cache import KeyValueStore

from .database import Base, KeyValueModel, create_engine, create_session_factory

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]")


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStore(KeyValueStore):
    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_FILENAME.sub('_', key)}.json"

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    @staticmethod
    def _read(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


class RedisStore(KeyValueStore):
    def __init__(self, client: aioredis.Redis):
        self.redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        pool = aioredis.ConnectionPool.from_url(url, decode_responses=True)
        return cls(aioredis.Redis(connection_pool=pool))

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    async def close(self) -> None:
        await self.redis.aclose()


class SqlStore(KeyValueStore):
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self._ready = False

    @classmethod
    def from_url(cls, url: str) -> "SqlStore":
        return cls(create_engine(url))

    async def _ensure_schema(self) -> None:
        if self._ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._ready = True

    async def get(self, key: str) -> Optional[str]:
        await self._ensure_schema()
        async with self._session_factory() as session:
            row = await session.get(KeyValueModel, key)
            return row.value if row is not None else None

    async def set(self, key: str, value: str) -> None:
        await self._ensure_schema()
        async with self._session_factory() as session:
            await session.merge(KeyValueModel(key=key, value=value))
            await session.commit()

    async def close(self) -> None:
        await self.engine.dispose()
