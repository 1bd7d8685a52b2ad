"""
Key-value storage for MindEase.

Persists arbitrary JSON values keyed by feature and user
(``ai_chat_<user_id>``, ``mood_<user_id>``, …).  No transactions and
no schema versioning: the last write wins.  An in-memory store backs
tests and single-process use; the Redis store wraps ``redis.asyncio``.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any

import redis.asyncio as aioredis

from mindease_common.config import get_settings


def storage_key(feature: str, user_id: str) -> str:
    """Build the namespaced key for *feature* and *user_id*.

    Raises:
        ValueError: If either part is empty.
    """
    if not feature or not user_id:
        raise ValueError("feature and user_id must be non-empty")
    return f"{feature}_{user_id}"


class KeyValueStore(ABC):
    """Async JSON key-value store contract."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the JSON value stored at *key*, or ``None``."""
        ...  # pragma: no cover

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* (JSON-serialisable) at *key*, replacing any previous value."""
        ...  # pragma: no cover

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""
        ...  # pragma: no cover

    async def connect(self) -> None:
        """Open underlying connections (no-op by default)."""

    async def close(self) -> None:
        """Release underlying connections (no-op by default)."""

    async def health_check(self) -> bool:
        return True


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store that keeps JSON text in a dict.

    Values are round-tripped through JSON so callers see the same
    copy semantics as with the Redis store.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, default=str)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed store.

    Args:
        url: Redis connection URL.  Falls back to ``Settings.redis_url``.
    """

    def __init__(self, url: str | None = None) -> None:
        self._url = url or get_settings().redis_url
        self._redis: aioredis.Redis | None = None

    # ── lifecycle ──

    async def connect(self) -> None:
        """Establish the Redis connection (idempotent)."""
        if self._redis is None:
            self._redis = aioredis.from_url(self._url, decode_responses=True)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.close()
            self._redis = None

    @property
    def redis(self) -> aioredis.Redis:
        """Return the underlying ``aioredis.Redis`` instance.

        Raises:
            RuntimeError: If ``connect()`` has not been called.
        """
        if self._redis is None:
            raise RuntimeError("RedisKeyValueStore is not connected. Call connect() first.")
        return self._redis

    # ── key-value ──

    async def get(self, key: str) -> Any | None:
        raw = await self.redis.get(key)
        return None if raw is None else json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(key, json.dumps(value, default=str))

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def health_check(self) -> bool:
        """Verify connectivity by issuing a ``PING``."""
        try:
            return bool(await self.redis.ping())
        except Exception:  # noqa: BLE001
            return False


def create_store(backend: str | None = None) -> KeyValueStore:
    """Instantiate the store named by *backend* (``memory`` or ``redis``).

    Raises:
        ValueError: For an unknown backend name.
    """
    name = backend or get_settings().storage_backend
    if name == "memory":
        return InMemoryKeyValueStore()
    if name == "redis":
        return RedisKeyValueStore()
    raise ValueError(f"Unknown storage backend '{name}'. Available: ['memory', 'redis']")
