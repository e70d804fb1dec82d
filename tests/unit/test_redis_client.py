# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the Redis client wrapper.

The redis-py connection is replaced with a mock; a live server is not needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from fluency.infrastructure.cache import RedisClient, RedisError


async def _scan(keys):
    for key in keys:
        yield key


@pytest.fixture
def mock_redis() -> MagicMock:
    redis = MagicMock()
    redis.set = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.delete = AsyncMock(return_value=1)
    redis.ping = AsyncMock(return_value=True)
    redis.scan_iter = MagicMock(side_effect=lambda match, count: _scan([]))
    return redis


@pytest.fixture
def redis_client(settings, mock_redis) -> RedisClient:
    client = RedisClient(settings)
    client._redis = mock_redis
    return client


class TestRedisOperations:
    """Tests for Redis operations."""

    async def test_set_serializes_json_with_expiry(self, redis_client, mock_redis) -> None:
        await redis_client.set("course:1:complete:1", {"title": "Café"}, expire_seconds=60)

        mock_redis.set.assert_awaited_once_with("course:1:complete:1", '{"title": "Café"}', ex=60)

    async def test_set_passes_strings_through(self, redis_client, mock_redis) -> None:
        await redis_client.set("key", '{"already": "json"}')

        mock_redis.set.assert_awaited_once_with("key", '{"already": "json"}', ex=None)

    async def test_get_decodes_json(self, redis_client, mock_redis) -> None:
        mock_redis.get.return_value = '{"id": "abc", "version": 2}'

        assert await redis_client.get("key") == {"id": "abc", "version": 2}

    async def test_get_returns_plain_text_as_is(self, redis_client, mock_redis) -> None:
        mock_redis.get.return_value = "not json"

        assert await redis_client.get("key") == "not json"

    async def test_get_missing_key(self, redis_client) -> None:
        assert await redis_client.get("missing") is None

    async def test_keys_uses_scan(self, redis_client, mock_redis) -> None:
        mock_redis.scan_iter.side_effect = lambda match, count: _scan(["a:1", "a:2"])

        keys = await redis_client.keys("a:*")

        assert keys == ["a:1", "a:2"]
        mock_redis.scan_iter.assert_called_once_with(match="a:*", count=RedisClient.SCAN_COUNT)

    async def test_delete_pattern(self, redis_client, mock_redis) -> None:
        mock_redis.scan_iter.side_effect = lambda match, count: _scan(["a:1", "a:2"])
        mock_redis.delete.return_value = 2

        assert await redis_client.delete_pattern("a:*") == 2
        mock_redis.delete.assert_awaited_once_with("a:1", "a:2")

    async def test_delete_pattern_without_matches(self, redis_client, mock_redis) -> None:
        assert await redis_client.delete_pattern("a:*") == 0
        mock_redis.delete.assert_not_awaited()

    async def test_delete_reports_existence(self, redis_client, mock_redis) -> None:
        mock_redis.delete.return_value = 0

        assert await redis_client.delete("gone") is False


class TestRedisErrors:
    """Tests for error wrapping."""

    async def test_driver_errors_are_wrapped(self, redis_client, mock_redis) -> None:
        mock_redis.set.side_effect = RedisConnectionError("refused")

        with pytest.raises(RedisError) as exc_info:
            await redis_client.set("key", "value")

        assert "Failed to set key: key" in str(exc_info.value)
        assert isinstance(exc_info.value.original_error, RedisConnectionError)

    async def test_not_connected(self, settings) -> None:
        client = RedisClient(settings)

        with pytest.raises(RedisError) as exc_info:
            await client.get("key")

        assert "not connected" in str(exc_info.value)

    async def test_ping(self, redis_client, mock_redis, settings) -> None:
        assert await redis_client.ping() is True

        mock_redis.ping.side_effect = RedisConnectionError("down")
        assert await redis_client.ping() is False
        assert await RedisClient(settings).ping() is False

    async def test_close_resets_state(self, redis_client, mock_redis) -> None:
        mock_redis.aclose = AsyncMock()

        await redis_client.close()

        mock_redis.aclose.assert_awaited_once()
        assert await redis_client.ping() is False
