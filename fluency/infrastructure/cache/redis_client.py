# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Redis client for the detail cache.

Async wrapper around redis-py with JSON serialization and SCAN-based
pattern operations. Implements the CacheStore interface of the sync engine.

Example:
    redis = RedisClient(settings)
    await redis.connect()
    await redis.set("listening_question:42:uncomplete:1", detail_json, expire_seconds=86400)
    keys = await redis.keys("listening_question:42:*")
"""

import json
from typing import TYPE_CHECKING, Any, Optional

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError as BaseRedisError

if TYPE_CHECKING:
    from fluency.core.config.settings import Settings


class RedisError(Exception):
    """Exception raised for Redis operation failures.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying Redis error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class RedisClient:
    """Async Redis client.

    Provides connection pooling, JSON (de)serialization and the key
    operations used by the detail cache.

    Example:
        client = RedisClient(settings)
        await client.connect()
        await client.set("key", {"a": 1}, expire_seconds=60)
        value = await client.get("key")
        await client.close()
    """

    SCAN_COUNT = 500

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings
        self._pool: Optional[ConnectionPool] = None
        self._redis: Optional[Redis] = None

    async def connect(self) -> None:
        """Create the Redis connection pool.

        Raises:
            RedisError: If connection fails.
        """
        try:
            self._pool = ConnectionPool.from_url(
                self._settings.redis.url,
                max_connections=self._settings.redis.max_connections,
                decode_responses=True,
            )
            self._redis = Redis(connection_pool=self._pool)
            await self._redis.ping()
        except BaseRedisError as e:
            raise RedisError("Failed to connect to Redis", e) from e

    async def close(self) -> None:
        """Close the Redis connection pool."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

        if self._pool is not None:
            await self._pool.disconnect()
            self._pool = None

    def _ensure_connected(self) -> Redis:
        if self._redis is None:
            raise RedisError("Redis client not connected. Call connect() first.")
        return self._redis

    def _serialize(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, ensure_ascii=False, default=str)

    def _deserialize(self, value: Optional[str]) -> Any:
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value

    async def set(
        self,
        key: str,
        value: Any,
        expire_seconds: Optional[int] = None,
    ) -> None:
        """Set a key-value pair.

        Args:
            key: The key.
            value: The value (JSON serialized unless already a string).
            expire_seconds: Optional expiration time in seconds.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            await redis.set(key, self._serialize(value), ex=expire_seconds)
        except BaseRedisError as e:
            raise RedisError(f"Failed to set key: {key}", e) from e

    async def get(self, key: str) -> Any:
        """Get a value by key.

        Returns:
            The deserialized value or None if not found.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            return self._deserialize(await redis.get(key))
        except BaseRedisError as e:
            raise RedisError(f"Failed to get key: {key}", e) from e

    async def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if the key was deleted, False if it didn't exist.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            return await redis.delete(key) > 0
        except BaseRedisError as e:
            raise RedisError(f"Failed to delete key: {key}", e) from e

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob pattern using SCAN.

        Args:
            pattern: Glob pattern, e.g. ``course:42:*``.

        Returns:
            Matching keys in SCAN order.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            return [key async for key in redis.scan_iter(match=pattern, count=self.SCAN_COUNT)]
        except BaseRedisError as e:
            raise RedisError(f"Failed to scan keys: {pattern}", e) from e

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob pattern.

        Returns:
            Number of keys deleted.

        Raises:
            RedisError: If the operation fails.
        """
        redis = self._ensure_connected()
        try:
            keys = [key async for key in redis.scan_iter(match=pattern, count=self.SCAN_COUNT)]
            if keys:
                return await redis.delete(*keys)
            return 0
        except BaseRedisError as e:
            raise RedisError(f"Failed to delete keys: {pattern}", e) from e

    async def ping(self) -> bool:
        """Check if Redis is reachable."""
        try:
            redis = self._ensure_connected()
            await redis.ping()
            return True
        except (RedisError, BaseRedisError):
            return False
