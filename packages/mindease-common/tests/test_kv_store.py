"""
Tests for the mindease-common key-value stores.

The Redis store is exercised against a mocked ``redis.asyncio`` client.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from mindease_common.storage import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    create_store,
    storage_key,
)


class TestStorageKey:
    def test_namespaced(self) -> None:
        assert storage_key("ai_chat", "u1") == "ai_chat_u1"

    @pytest.mark.parametrize("feature,user", [("", "u1"), ("ai_chat", "")])
    def test_empty_parts_rejected(self, feature: str, user: str) -> None:
        with pytest.raises(ValueError):
            storage_key(feature, user)


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        assert await InMemoryKeyValueStore().get("nope") is None

    @pytest.mark.asyncio
    async def test_set_get_delete(self) -> None:
        store = InMemoryKeyValueStore()
        await store.set("k", {"a": [1, 2]})
        assert await store.get("k") == {"a": [1, 2]}
        await store.delete("k")
        assert await store.get("k") is None
        await store.delete("k")  # missing keys are ignored

    @pytest.mark.asyncio
    async def test_last_write_wins(self) -> None:
        store = InMemoryKeyValueStore()
        await store.set("k", 1)
        await store.set("k", 2)
        assert await store.get("k") == 2
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_values_are_copies(self) -> None:
        store = InMemoryKeyValueStore()
        value = {"items": [1]}
        await store.set("k", value)
        value["items"].append(2)
        assert await store.get("k") == {"items": [1]}


@pytest.fixture()
def mock_redis() -> AsyncMock:
    r = AsyncMock()
    r.get = AsyncMock(return_value=None)
    r.set = AsyncMock(return_value=True)
    r.delete = AsyncMock(return_value=1)
    r.ping = AsyncMock(return_value=True)
    r.close = AsyncMock()
    return r


@pytest.fixture()
def redis_store(mock_redis: AsyncMock) -> RedisKeyValueStore:
    store = RedisKeyValueStore(url="redis://localhost:6379/0")
    store._redis = mock_redis
    return store


class TestRedisKeyValueStore:
    def test_not_connected_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not connected"):
            _ = RedisKeyValueStore(url="redis://x").redis

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self) -> None:
        store = RedisKeyValueStore(url="redis://localhost:6379/0")
        with patch("mindease_common.storage.kv_store.aioredis.from_url") as from_url:
            await store.connect()
            await store.connect()
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)

    @pytest.mark.asyncio
    async def test_set_serialises_json(
        self, redis_store: RedisKeyValueStore, mock_redis: AsyncMock
    ) -> None:
        await redis_store.set("k", {"a": 1})
        mock_redis.set.assert_awaited_once_with("k", json.dumps({"a": 1}))

    @pytest.mark.asyncio
    async def test_get_deserialises_json(
        self, redis_store: RedisKeyValueStore, mock_redis: AsyncMock
    ) -> None:
        mock_redis.get.return_value = '[{"role": "ai"}]'
        assert await redis_store.get("k") == [{"role": "ai"}]

    @pytest.mark.asyncio
    async def test_get_missing(self, redis_store: RedisKeyValueStore) -> None:
        assert await redis_store.get("k") is None

    @pytest.mark.asyncio
    async def test_delete(self, redis_store: RedisKeyValueStore, mock_redis: AsyncMock) -> None:
        await redis_store.delete("k")
        mock_redis.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_health_check(self, redis_store: RedisKeyValueStore, mock_redis: AsyncMock) -> None:
        assert await redis_store.health_check() is True
        mock_redis.ping.side_effect = ConnectionError("down")
        assert await redis_store.health_check() is False

    @pytest.mark.asyncio
    async def test_close(self, redis_store: RedisKeyValueStore, mock_redis: AsyncMock) -> None:
        await redis_store.close()
        mock_redis.close.assert_awaited_once()
        with pytest.raises(RuntimeError):
            _ = redis_store.redis


class TestCreateStore:
    def test_memory(self) -> None:
        assert isinstance(create_store("memory"), InMemoryKeyValueStore)

    def test_redis(self) -> None:
        assert isinstance(create_store("redis"), RedisKeyValueStore)

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_store("sqlite")
