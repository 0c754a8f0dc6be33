"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from stock_management.domain.entities.permission import (
    PermissionEntity,
    RolePermissionEntity,
)
from stock_management.domain.entities.tenant import TenantEntity
from stock_management.domain.entities.user import UserEntity

__all__ = [
    "PermissionEntity",
    "RolePermissionEntity",
    "TenantEntity",
    "UserEntity",
]
