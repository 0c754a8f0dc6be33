"""Redis-based cache for resolved role permissions.

Async Redis with JSON values and TTL. Cache failures never change an
authorization decision: every method degrades to "miss" / "not stored" and
callers fall back to the repository.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from stock_management.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNLINK_CHUNK_SIZE = 500


class CacheService:
    """Async Redis cache service with TTL support (implements ICacheService).

    Call connect() at startup and disconnect() at shutdown. When
    settings.redis_enabled is False, connect() is a no-op and the cache
    stays unavailable.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional pre-built client (tests or DI); treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on startup."""
        if not self.settings.redis_enabled:
            logger.info("Redis cache disabled by configuration")
            return
        if self.redis is not None and self._connected:
            return
        password = (
            self.settings.redis_password.get_secret_value()
            if self.settings.redis_password
            else None
        )
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            await client.aclose()
            self.redis = None
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False

    async def _reconnect(self) -> bool:
        """Drop the current client and connect again. Returns True if reconnected."""
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _execute(
        self,
        op_name: str,
        key: str,
        operation: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run operation; on connection loss reconnect once and retry, else return default."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await operation(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await operation(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op_name, key)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op_name, key)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op_name, key)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing, unreadable or unavailable."""

        async def _get(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            try:
                decoded = json.loads(value)
            except (TypeError, ValueError):
                logger.warning("Cache entry %s is not valid JSON; dropping it", key)
                await client.delete(key)
                return None
            logger.debug("Cache HIT: %s", key)
            return decoded

        return await self._execute("get", key, _get, None)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value (JSON-serializable) with TTL in seconds. Returns True on success."""
        serialized = json.dumps(value)

        async def _set(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._execute("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command succeeded."""

        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._execute("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK.

        Args:
            pattern: Redis SCAN match pattern (e.g. role_permissions:tenant-123:*).

        Returns:
            Number of keys deleted.
        """

        async def _unlink(client: redis.Redis, chunk: list[str]) -> int:
            async with client.pipeline(transaction=False) as pipe:
                pipe.unlink(*chunk)
                results = await pipe.execute()
            return sum(int(r or 0) for r in results)

        async def _delete_pattern(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= _UNLINK_CHUNK_SIZE:
                    deleted += await _unlink(client, chunk)
                    chunk = []
            if chunk:
                deleted += await _unlink(client, chunk)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted

        return await self._execute("delete_pattern", pattern, _delete_pattern, 0)
