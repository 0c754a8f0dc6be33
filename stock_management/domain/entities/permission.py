"""Permission and RolePermission domain entities.

A Permission is a tenant-scoped, fine-grained capability identified by its
code. A RolePermission grants one Permission to one UserRole within a tenant;
(tenant_id, role, permission_id) is unique per grant.
"""

from dataclasses import dataclass

from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import (
    SystemDefinedPermissionException,
    ValidationException,
)
from stock_management.domain.value_objects.core import is_valid_permission_code


@dataclass
class PermissionEntity:
    """Domain entity for a permission within a tenant.

    System-defined permissions are created at tenant initialization and can
    never be deleted. Validation runs on construction.
    """

    id: str
    tenant_id: str
    name: str
    code: str
    module: str
    description: str | None = None
    is_system_defined: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate permission business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Permission ID is required", field="id")
        if not self.tenant_id:
            raise ValidationException("Tenant ID is required", field="tenant_id")
        if not self.name or not self.name.strip():
            raise ValidationException("Permission name is required", field="name")
        if not is_valid_permission_code(self.code):
            raise ValidationException(
                f"Invalid permission code: {self.code!r}", field="code"
            )
        if not self.module or not self.module.strip():
            raise ValidationException("Permission module is required", field="module")

    def ensure_deletable(self) -> None:
        """Raise SystemDefinedPermissionException if this permission is system-defined."""
        if self.is_system_defined:
            raise SystemDefinedPermissionException(self.code)


@dataclass
class RolePermissionEntity:
    """Grant of one permission to one role within a tenant."""

    id: str
    tenant_id: str
    role: UserRole
    permission_id: str
    permission: PermissionEntity | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate grant consistency. Raises ValidationException if invalid."""
        if not self.tenant_id:
            raise ValidationException("Tenant ID is required", field="tenant_id")
        if not isinstance(self.role, UserRole):
            raise ValidationException(f"Invalid role: {self.role!r}", field="role")
        if not self.permission_id:
            raise ValidationException("Permission ID is required", field="permission_id")
        if self.permission is not None:
            if self.permission.id != self.permission_id:
                raise ValidationException(
                    "Resolved permission does not match permission_id",
                    field="permission",
                )
            if self.permission.tenant_id != self.tenant_id:
                raise ValidationException(
                    "Permission belongs to a different tenant", field="permission"
                )

    @property
    def grant_key(self) -> tuple[str, UserRole, str]:
        """Uniqueness key of the grant: (tenant_id, role, permission_id)."""
        return (self.tenant_id, self.role, self.permission_id)
