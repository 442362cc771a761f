"""Tests for the in-memory and Redis session stores."""

import json
from unittest.mock import AsyncMock

import pytest

from flyvalid.config.properties.session import SessionProperties
from flyvalid.session.adapters.memory import InMemorySessionStore
from flyvalid.session.adapters.redis import RedisSessionStore
from flyvalid.session.factory import create_session_store


class TestInMemorySessionStore:
    @pytest.mark.asyncio
    async def test_save_and_get(self):
        store = InMemorySessionStore()
        await store.save("s1", {"user": "ana"}, ttl=60)
        assert await store.get("s1") == {"user": "ana"}
        assert await store.exists("s1")

    @pytest.mark.asyncio
    async def test_get_returns_a_copy(self):
        store = InMemorySessionStore()
        await store.save("s1", {"items": [1]}, ttl=60)
        data = await store.get("s1")
        data["items"].append(2)
        assert await store.get("s1") == {"items": [1]}

    @pytest.mark.asyncio
    async def test_expired_entries_vanish(self):
        store = InMemorySessionStore()
        await store.save("s1", {"a": 1}, ttl=-1)
        assert await store.get("s1") is None
        assert not await store.exists("s1")

    @pytest.mark.asyncio
    async def test_delete(self):
        store = InMemorySessionStore()
        await store.save("s1", {}, ttl=60)
        await store.delete("s1")
        await store.delete("missing")
        assert await store.get("s1") is None


class TestRedisSessionStore:
    @pytest.mark.asyncio
    async def test_save_serializes_with_prefix_and_ttl(self):
        client = AsyncMock()
        store = RedisSessionStore(client)
        await store.save("s1", {"a": 1}, ttl=30)
        client.set.assert_awaited_once_with("flyvalid:session:s1", json.dumps({"a": 1}).encode(), ex=30)

    @pytest.mark.asyncio
    async def test_get_deserializes(self):
        client = AsyncMock()
        client.get.return_value = b'{"a": 1}'
        assert await RedisSessionStore(client, key_prefix="p:").get("s1") == {"a": 1}
        client.get.assert_awaited_once_with("p:s1")

    @pytest.mark.asyncio
    async def test_get_missing_or_corrupt(self):
        client = AsyncMock()
        client.get.return_value = None
        store = RedisSessionStore(client)
        assert await store.get("s1") is None
        client.get.return_value = b"not json"
        assert await store.get("s1") is None

    @pytest.mark.asyncio
    async def test_exists(self):
        client = AsyncMock()
        client.exists.return_value = 1
        assert await RedisSessionStore(client).exists("s1")


class TestCreateSessionStore:
    def test_memory_is_default(self):
        assert isinstance(create_session_store(SessionProperties()), InMemorySessionStore)
