"""Durable key-value capability used for per-device counters.

Callers get a store that never raises: read failures return the default and
write failures return False. The raw backends below are allowed to raise;
`SafeKeyValueStore` is the boundary that absorbs it.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from redis import asyncio as aioredis

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> None: ...


class InMemoryKeyValueBackend:
    """Process-local backend, one instance per session."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class RedisKeyValueBackend:
    def __init__(self, url: str, *, client: aioredis.Redis | None = None) -> None:
        self._url = url
        self._redis = client

    async def _client(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(self._url, decode_responses=True)
        return self._redis

    async def get(self, key: str) -> str | None:
        redis = await self._client()
        return await redis.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        redis = await self._client()
        if ttl:
            await redis.set(key, value, ex=max(ttl, 1))
        else:
            await redis.set(key, value)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None


class SafeKeyValueStore:
    """JSON-valued wrapper that folds backend errors into defaults."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    async def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = await self._backend.get(key)
        except Exception:
            logger.error("kv read failed", extra={"key": key}, exc_info=True)
            return default
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return raw

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        try:
            payload = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
            await self._backend.set(key, payload, ttl=ttl)
        except Exception:
            logger.error("kv write failed", extra={"key": key}, exc_info=True)
            return False
        return True


def build_kv_store(redis_url: str | None) -> SafeKeyValueStore:
    if redis_url:
        return SafeKeyValueStore(RedisKeyValueBackend(redis_url))
    return SafeKeyValueStore(InMemoryKeyValueBackend())


__all__ = [
    "InMemoryKeyValueBackend",
    "KeyValueBackend",
    "RedisKeyValueBackend",
    "SafeKeyValueStore",
    "build_kv_store",
]
