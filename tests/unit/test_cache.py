"""Unit tests for cache key builders and the Redis CacheService (mocked client)."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from stock_management.core.config import Settings
from stock_management.domain.enums import UserRole
from stock_management.infrastructure.cache import (
    CacheService,
    role_permissions_key,
    tenant_role_permissions_pattern,
)


class TestKeys:
    def test_role_key_uses_rank(self) -> None:
        assert role_permissions_key("tenant-a", UserRole.MANAGER) == "role_permissions:tenant-a:3"

    def test_keys_differ_per_tenant_and_role(self) -> None:
        keys = {
            role_permissions_key(t, r)
            for t in ("tenant-a", "tenant-b")
            for r in UserRole
        }
        assert len(keys) == 10

    def test_pattern(self) -> None:
        assert tenant_role_permissions_pattern("tenant-a") == "role_permissions:tenant-a:*"

    @pytest.mark.parametrize("tenant_id", ["", "a:b"])
    def test_invalid_component(self, tenant_id) -> None:
        with pytest.raises(ValueError):
            role_permissions_key(tenant_id, UserRole.EMPLOYEE)
        with pytest.raises(ValueError):
            tenant_role_permissions_pattern(tenant_id)


@pytest.fixture
def disabled_settings() -> Settings:
    return Settings(redis_enabled=False)


@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache(client, disabled_settings) -> CacheService:
    return CacheService(redis_client=client, settings=disabled_settings)


class TestCacheService:
    def test_injected_client_is_available(self, cache) -> None:
        assert cache.is_available() is True

    def test_no_client_is_unavailable(self, disabled_settings) -> None:
        assert CacheService(settings=disabled_settings).is_available() is False

    @pytest.mark.asyncio
    async def test_connect_disabled_is_noop(self, disabled_settings) -> None:
        svc = CacheService(settings=disabled_settings)
        await svc.connect()
        assert svc.is_available() is False
        assert await svc.get("k") is None
        assert await svc.set("k", [1]) is False

    @pytest.mark.asyncio
    async def test_get_deserializes_json(self, cache, client) -> None:
        client.get = AsyncMock(return_value=json.dumps([{"code": "VIEW_PRODUCTS"}]))
        assert await cache.get("k") == [{"code": "VIEW_PRODUCTS"}]

    @pytest.mark.asyncio
    async def test_get_miss(self, cache, client) -> None:
        client.get = AsyncMock(return_value=None)
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_corrupt_value_is_a_miss_and_dropped(self, cache, client) -> None:
        client.get = AsyncMock(return_value="{not json")
        assert await cache.get("k") is None
        client.delete.assert_awaited_once_with("k")
        assert cache.is_available() is True

    @pytest.mark.asyncio
    async def test_set_uses_setex(self, cache, client) -> None:
        assert await cache.set("k", {"a": 1}, ttl=30) is True
        client.setex.assert_awaited_once_with("k", 30, json.dumps({"a": 1}))

    @pytest.mark.asyncio
    async def test_delete(self, cache, client) -> None:
        assert await cache.delete("k") is True
        client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_redis_error_returns_default(self, cache, client) -> None:
        client.get = AsyncMock(side_effect=redis.RedisError("boom"))
        assert await cache.get("k") is None
        assert cache.is_available() is True

    @pytest.mark.asyncio
    async def test_connection_loss_disables_cache(self, cache, client) -> None:
        client.setex = AsyncMock(side_effect=redis.ConnectionError("down"))
        assert await cache.set("k", 1) is False
        client.aclose.assert_awaited()
        assert cache.is_available() is False

    @pytest.mark.asyncio
    async def test_delete_pattern_unlinks_scanned_keys(self, cache, client) -> None:
        async def _scan_iter(match):
            assert match == "role_permissions:tenant-a:*"
            for key in ("role_permissions:tenant-a:2", "role_permissions:tenant-a:3"):
                yield key

        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[2])
        pipe.__aenter__.return_value = pipe
        client.scan_iter = _scan_iter
        client.pipeline = MagicMock(return_value=pipe)

        deleted = await cache.delete_pattern("role_permissions:tenant-a:*")
        assert deleted == 2
        pipe.unlink.assert_called_once_with(
            "role_permissions:tenant-a:2", "role_permissions:tenant-a:3"
        )

    @pytest.mark.asyncio
    async def test_disconnect(self, cache, client) -> None:
        await cache.disconnect()
        client.aclose.assert_awaited_once()
        assert cache.is_available() is False
