"""Domain value objects (immutable, self-validating)."""

from stock_management.domain.value_objects.core import (
    PermissionCode,
    is_valid_permission_code,
)

__all__ = ["PermissionCode", "is_valid_permission_code"]
