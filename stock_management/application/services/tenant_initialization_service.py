"""Tenant RBAC initialization (implements ITenantInitializationService).

Seeds a new tenant with one system-defined permission per catalog entry and
the default role grants. Defaults are read here and nowhere else; request-time
checks use the persisted grants, which tenants may customize afterwards.
"""

from __future__ import annotations

from stock_management.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    ITenantRepository,
)
from stock_management.core.tenant_validation import is_valid_tenant_id_format
from stock_management.domain.entities.permission import (
    PermissionEntity,
    RolePermissionEntity,
)
from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import (
    TenantNotFoundException,
    ValidationException,
)
from stock_management.domain.permission_catalog import (
    PERMISSION_DEFINITIONS,
    PermissionDefinition,
    default_permissions_for,
    seeded_roles,
)
from stock_management.shared.telemetry.logging import get_logger
from stock_management.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


class TenantInitializationService:
    """Initializes a new tenant: permissions, then role-permission grants."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        role_permission_repo: IRolePermissionRepository,
        tenant_repo: ITenantRepository | None = None,
    ) -> None:
        self.permission_repo = permission_repo
        self.role_permission_repo = role_permission_repo
        self.tenant_repo = tenant_repo

    async def initialize_role_permissions(self, tenant_id: str) -> int:
        """Seed missing catalog permissions and default grants. Returns number of grants created.

        Only what is missing is created, so a call that failed partway can be
        retried, and a fully seeded tenant returns 0.

        Raises:
            ValidationException: If tenant_id is malformed.
            TenantNotFoundException: If a tenant repository is configured and the tenant is missing.
        """
        if not is_valid_tenant_id_format(tenant_id):
            raise ValidationException(f"Invalid tenant ID: {tenant_id!r}", field="tenant_id")
        if self.tenant_repo is not None:
            if await self.tenant_repo.get_by_id(tenant_id) is None:
                raise TenantNotFoundException(tenant_id)

        permission_map = {
            p.code: p for p in await self.permission_repo.get_by_tenant(tenant_id)
        }
        missing = [d for d in PERMISSION_DEFINITIONS if d.code not in permission_map]
        if missing:
            created = await self.permission_repo.create_permissions_bulk(
                self._build_permissions(tenant_id, missing)
            )
            permission_map.update((p.code, p) for p in created)

        grants: list[RolePermissionEntity] = []
        for role in seeded_roles():
            held = {
                g.permission_id
                for g in await self.role_permission_repo.get_by_role(tenant_id, role)
            }
            grants.extend(
                g
                for g in self._build_role_permissions(tenant_id, role, permission_map)
                if g.permission_id not in held
            )
        for grant in grants:
            await self.role_permission_repo.assign_permission_to_role(grant)

        if not missing and not grants:
            logger.info("Tenant %s already initialized; skipping RBAC seed", tenant_id)
        else:
            logger.info(
                "Tenant %s initialized: %s permissions, %s role grants",
                tenant_id,
                len(missing),
                len(grants),
            )
        return len(grants)

    @staticmethod
    def _build_permissions(
        tenant_id: str, definitions: list[PermissionDefinition]
    ) -> list[PermissionEntity]:
        """One system-defined permission per catalog definition."""
        return [
            PermissionEntity(
                id=generate_cuid(),
                tenant_id=tenant_id,
                name=d.name,
                code=d.code,
                module=d.module.value,
                description=d.description,
                is_system_defined=True,
            )
            for d in definitions
        ]

    @staticmethod
    def _build_role_permissions(
        tenant_id: str, role: UserRole, permission_map: dict[str, PermissionEntity]
    ) -> list[RolePermissionEntity]:
        """Default grants for role, ordered by code."""
        return [
            RolePermissionEntity(
                id=generate_cuid(),
                tenant_id=tenant_id,
                role=role,
                permission_id=permission_map[code].id,
                permission=permission_map[code],
            )
            for code in sorted(default_permissions_for(role))
        ]
