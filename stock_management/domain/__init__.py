"""Domain layer: entities, value objects, enums, permission catalog, exceptions.

No dependencies on infrastructure. Used by application and infrastructure
layers.
"""

from stock_management.domain.entities import (
    PermissionEntity,
    RolePermissionEntity,
    TenantEntity,
    UserEntity,
)
from stock_management.domain.enums import PermissionModule, RoleComparison, UserRole
from stock_management.domain.exceptions import (
    DuplicateAssignmentException,
    PermissionInUseException,
    ResourceNotFoundException,
    StockManagementException,
    SystemDefinedPermissionException,
    TenantNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from stock_management.domain.permission_catalog import (
    Permissions,
    default_permissions_for,
)
from stock_management.domain.value_objects import (
    PermissionCode,
    is_valid_permission_code,
)

__all__ = [
    # Entities
    "PermissionEntity",
    "RolePermissionEntity",
    "TenantEntity",
    "UserEntity",
    # Enums
    "PermissionModule",
    "RoleComparison",
    "UserRole",
    # Exceptions
    "DuplicateAssignmentException",
    "PermissionInUseException",
    "ResourceNotFoundException",
    "StockManagementException",
    "SystemDefinedPermissionException",
    "TenantNotFoundException",
    "UnauthorizedException",
    "ValidationException",
    # Catalog
    "Permissions",
    "default_permissions_for",
    # Value objects
    "PermissionCode",
    "is_valid_permission_code",
]
