"""Cache: Redis service and cache key builders.

Used by AuthorizationService to cache resolved role permissions.
CacheService reads connection settings from stock_management.core.config.
"""

from stock_management.infrastructure.cache.keys import (
    role_permissions_key,
    tenant_role_permissions_pattern,
)
from stock_management.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "role_permissions_key",
    "tenant_role_permissions_pattern",
]
