"""Cache key builders. Single place for key format.

Key components (tenant_id) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys.
"""

from stock_management.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ROLE_PERMISSIONS,
)
from stock_management.domain.enums import UserRole


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def role_permissions_key(tenant_id: str, role: UserRole) -> str:
    """Cache key for the resolved permissions of role in tenant."""
    _validate_key_component(tenant_id, "tenant_id")
    return (
        f"{CACHE_PREFIX_ROLE_PERMISSIONS}{CACHE_KEY_SEP}{tenant_id}"
        f"{CACHE_KEY_SEP}{role.rank}"
    )


def tenant_role_permissions_pattern(tenant_id: str) -> str:
    """SCAN match pattern covering every role key of tenant."""
    _validate_key_component(tenant_id, "tenant_id")
    return f"{CACHE_PREFIX_ROLE_PERMISSIONS}{CACHE_KEY_SEP}{tenant_id}{CACHE_KEY_SEP}*"
