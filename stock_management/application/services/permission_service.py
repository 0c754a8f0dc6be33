"""Permission application service: tenant permission catalog and role grants.

Every operation takes the acting user, checks tenant access first and then
requires TENANT_ADMIN or higher. Grant changes invalidate the cached role
permissions when an AuthorizationService is wired in.
"""

from __future__ import annotations

from dataclasses import replace

from stock_management.application.dtos.permission import (
    PermissionCreate,
    PermissionInfo,
    PermissionUpdate,
    RolePermissionSummary,
)
from stock_management.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
)
from stock_management.application.services import authorization_policy as policy
from stock_management.application.services.authorization_service import (
    AuthorizationService,
)
from stock_management.domain.entities.permission import (
    PermissionEntity,
    RolePermissionEntity,
)
from stock_management.domain.entities.user import UserEntity
from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import (
    DuplicateAssignmentException,
    PermissionInUseException,
    ResourceNotFoundException,
    ValidationException,
)
from stock_management.domain.value_objects.core import is_valid_permission_code
from stock_management.shared.telemetry.logging import get_logger
from stock_management.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

_MSG_DUPLICATE_PERMISSION = "Permission with code '%s' already exists"
_MANAGER_ROLE = UserRole.TENANT_ADMIN


class PermissionService:
    """Create, update, delete and grant tenant permissions."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        role_permission_repo: IRolePermissionRepository,
        authorization_service: AuthorizationService | None = None,
    ) -> None:
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo
        self._authorization = authorization_service

    @staticmethod
    def _authorize(user: UserEntity, tenant_id: str) -> None:
        policy.ensure_can_access_tenant(user, tenant_id)
        policy.ensure_has_role(user, _MANAGER_ROLE)

    async def _get_permission(self, tenant_id: str, permission_id: str) -> PermissionEntity:
        permission = await self._permission_repo.get_by_id_and_tenant(
            permission_id, tenant_id
        )
        if permission is None:
            raise ResourceNotFoundException("permission", permission_id)
        return permission

    async def create_permission(
        self, user: UserEntity, tenant_id: str, data: PermissionCreate
    ) -> PermissionEntity:
        """Create a tenant permission.

        Raises:
            ValidationException: If the code is malformed or already exists in tenant.
        """
        self._authorize(user, tenant_id)
        if not is_valid_permission_code(data.code):
            raise ValidationException(
                f"Invalid permission code: {data.code!r}", field="code"
            )
        existing = await self._permission_repo.get_by_code_and_tenant(data.code, tenant_id)
        if existing:
            raise ValidationException(_MSG_DUPLICATE_PERMISSION % data.code, field="code")
        permission = PermissionEntity(
            id=generate_cuid(),
            tenant_id=tenant_id,
            name=data.name,
            code=data.code,
            module=data.module,
            description=data.description,
            is_system_defined=False,
        )
        created = await self._permission_repo.create_permission(permission)
        logger.info("Permission created: tenant=%s code=%s", tenant_id, created.code)
        return created

    async def update_permission(
        self,
        user: UserEntity,
        tenant_id: str,
        permission_id: str,
        data: PermissionUpdate,
    ) -> PermissionEntity:
        """Update name, module or description. The code never changes.

        The stored entity is left untouched when the new values are invalid.
        """
        self._authorize(user, tenant_id)
        permission = await self._get_permission(tenant_id, permission_id)
        changes = {
            name: value
            for name, value in (
                ("name", data.name),
                ("module", data.module),
                ("description", data.description),
            )
            if value is not None
        }
        # replace() re-runs __post_init__ validation on the copy
        candidate = replace(permission, **changes)
        updated = await self._permission_repo.update_permission(candidate)
        await self._invalidate_tenant(tenant_id)
        return updated

    async def delete_permission(
        self, user: UserEntity, tenant_id: str, permission_id: str
    ) -> bool:
        """Delete a tenant-defined permission that no role holds.

        Raises:
            SystemDefinedPermissionException: If created by tenant initialization.
            PermissionInUseException: If still granted to a role.
        """
        self._authorize(user, tenant_id)
        permission = await self._get_permission(tenant_id, permission_id)
        permission.ensure_deletable()
        grants = await self._role_permission_repo.get_by_permission_id(
            tenant_id, permission_id
        )
        if grants:
            raise PermissionInUseException(
                permission.code, sorted({str(g.role) for g in grants})
            )
        deleted = await self._permission_repo.delete_permission(permission_id, tenant_id)
        if deleted:
            logger.info("Permission deleted: tenant=%s code=%s", tenant_id, permission.code)
        return deleted

    async def get_permissions(
        self, user: UserEntity, tenant_id: str, module: str | None = None
    ) -> list[PermissionEntity]:
        """List tenant permissions, optionally filtered by module."""
        self._authorize(user, tenant_id)
        return await self._permission_repo.get_by_tenant(tenant_id, module)

    async def get_permission(
        self, user: UserEntity, tenant_id: str, permission_id: str
    ) -> PermissionEntity:
        """Return one tenant permission. Raises ResourceNotFoundException if absent."""
        self._authorize(user, tenant_id)
        return await self._get_permission(tenant_id, permission_id)

    async def get_available_permissions_for_role(
        self, user: UserEntity, tenant_id: str, role: UserRole
    ) -> list[PermissionEntity]:
        """Tenant permissions role does not hold yet (empty for SYSTEM_ADMIN)."""
        self._authorize(user, tenant_id)
        if role is UserRole.SYSTEM_ADMIN:
            return []
        granted = {
            g.permission_id
            for g in await self._role_permission_repo.get_by_role(tenant_id, role)
        }
        return [
            p
            for p in await self._permission_repo.get_by_tenant(tenant_id)
            if p.id not in granted
        ]

    async def assign_permissions_to_role(
        self,
        user: UserEntity,
        tenant_id: str,
        role: UserRole,
        permission_ids: list[str],
    ) -> int:
        """Grant permissions to role; existing grants are skipped. Returns number of new grants.

        Every id is resolved before any grant is written. If a write fails
        midway, the role cache is still invalidated for the grants already stored.

        Raises:
            ValidationException: If role is SYSTEM_ADMIN (never granted per tenant).
            ResourceNotFoundException: If a permission id is not in tenant.
        """
        self._authorize(user, tenant_id)
        if role is UserRole.SYSTEM_ADMIN:
            raise ValidationException(
                "SystemAdmin holds every permission and cannot receive grants",
                field="role",
            )
        permissions = [
            await self._get_permission(tenant_id, permission_id)
            for permission_id in dict.fromkeys(permission_ids)
        ]
        existing = {
            g.permission_id
            for g in await self._role_permission_repo.get_by_role(tenant_id, role)
        }
        created = 0
        try:
            for permission in permissions:
                if permission.id in existing:
                    continue
                grant = RolePermissionEntity(
                    id=generate_cuid(),
                    tenant_id=tenant_id,
                    role=role,
                    permission_id=permission.id,
                    permission=permission,
                )
                try:
                    await self._role_permission_repo.assign_permission_to_role(grant)
                except DuplicateAssignmentException:
                    logger.debug(
                        "Grant already exists: tenant=%s role=%s permission=%s",
                        tenant_id,
                        role,
                        permission.code,
                    )
                    continue
                created += 1
        finally:
            if created:
                await self._invalidate_role(tenant_id, role)
        return created

    async def remove_permission_from_role(
        self,
        user: UserEntity,
        tenant_id: str,
        role: UserRole,
        permission_id: str,
    ) -> bool:
        """Revoke one grant. Returns True if a grant was removed."""
        self._authorize(user, tenant_id)
        removed = await self._role_permission_repo.remove_permission_from_role(
            tenant_id, role, permission_id
        )
        if removed:
            await self._invalidate_role(tenant_id, role)
        return removed

    async def get_role_permission_summary(
        self, user: UserEntity, tenant_id: str, role: UserRole
    ) -> RolePermissionSummary:
        """Every tenant permission with whether role holds it."""
        self._authorize(user, tenant_id)
        all_permissions = await self._permission_repo.get_by_tenant(tenant_id)
        granted = {
            g.permission_id
            for g in await self._role_permission_repo.get_by_role(tenant_id, role)
        }
        infos = [
            PermissionInfo(
                id=p.id,
                name=p.name,
                code=p.code,
                module=p.module,
                is_assigned=role is UserRole.SYSTEM_ADMIN or p.id in granted,
            )
            for p in all_permissions
        ]
        return RolePermissionSummary(role=role, role_name=role.label, permissions=infos)

    async def get_roles_with_permission(
        self, user: UserEntity, tenant_id: str, permission_code: str
    ) -> list[UserRole]:
        """Roles holding permission_code in tenant, by rank. SYSTEM_ADMIN always included."""
        self._authorize(user, tenant_id)
        roles = [UserRole.SYSTEM_ADMIN]
        permission = await self._permission_repo.get_by_code_and_tenant(
            permission_code, tenant_id
        )
        if permission is None:
            return roles
        grants = await self._role_permission_repo.get_by_permission_id(
            tenant_id, permission.id
        )
        granted = {g.role for g in grants if g.role is not UserRole.SYSTEM_ADMIN}
        roles.extend(sorted(granted, key=lambda r: r.rank))
        return roles

    async def _invalidate_role(self, tenant_id: str, role: UserRole) -> None:
        if self._authorization is not None:
            await self._authorization.invalidate_role_cache(tenant_id, role)

    async def _invalidate_tenant(self, tenant_id: str) -> None:
        if self._authorization is not None:
            await self._authorization.invalidate_tenant_cache(tenant_id)
