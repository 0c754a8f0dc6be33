"""Repository interfaces (ports) for the application layer.

Protocols define contracts that persistence implementations must fulfill (DIP).
Every query is tenant-scoped; implementations must never return rows of a
different tenant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from stock_management.domain.entities import (
        PermissionEntity,
        RolePermissionEntity,
        TenantEntity,
        UserEntity,
    )
    from stock_management.domain.enums import UserRole


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for permission repository (DIP)."""

    async def get_by_id_and_tenant(
        self, permission_id: str, tenant_id: str
    ) -> PermissionEntity | None:
        """Return permission by id within tenant; otherwise None."""

    async def get_by_code_and_tenant(
        self, code: str, tenant_id: str
    ) -> PermissionEntity | None:
        """Return permission by code within tenant; otherwise None."""

    async def get_by_tenant(
        self, tenant_id: str, module: str | None = None
    ) -> list[PermissionEntity]:
        """Return tenant permissions, optionally filtered by module."""

    async def exists_for_tenant(self, tenant_id: str) -> bool:
        """Return True if the tenant has at least one permission (initialized)."""

    async def create_permission(self, permission: PermissionEntity) -> PermissionEntity:
        """Persist a new permission; return the stored entity."""

    async def create_permissions_bulk(
        self, permissions: list[PermissionEntity]
    ) -> list[PermissionEntity]:
        """Persist several permissions in one unit of work."""

    async def update_permission(self, permission: PermissionEntity) -> PermissionEntity:
        """Persist changes to an existing permission."""

    async def delete_permission(self, permission_id: str, tenant_id: str) -> bool:
        """Delete permission; return True if a row was removed."""


# Role permission repository interface
class IRolePermissionRepository(Protocol):
    """Protocol for role-permission grants keyed by (tenant_id, role)."""

    async def get_permissions_for_role(
        self, tenant_id: str, role: UserRole
    ) -> list[PermissionEntity]:
        """Return the permissions granted to role in tenant."""

    async def get_by_role(
        self, tenant_id: str, role: UserRole
    ) -> list[RolePermissionEntity]:
        """Return grant rows for role in tenant."""

    async def get_by_permission_id(
        self, tenant_id: str, permission_id: str
    ) -> list[RolePermissionEntity]:
        """Return grant rows referencing permission in tenant."""

    async def assign_permission_to_role(
        self, grant: RolePermissionEntity
    ) -> RolePermissionEntity:
        """Persist a grant. Raises DuplicateAssignmentException if already granted."""

    async def remove_permission_from_role(
        self, tenant_id: str, role: UserRole, permission_id: str
    ) -> bool:
        """Remove a grant; return True if a row was removed."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookup (DIP)."""

    async def get_by_id_and_tenant(
        self, user_id: str, tenant_id: str
    ) -> UserEntity | None:
        """Return user by id within tenant; otherwise None."""


# Tenant repository interface
class ITenantRepository(Protocol):
    """Protocol for tenant lookup (DIP)."""

    async def get_by_id(self, tenant_id: str) -> TenantEntity | None:
        """Return tenant by id; otherwise None."""
