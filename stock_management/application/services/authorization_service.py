"""Authorization service: resolves persisted role grants (with optional cache) and applies the policy."""

from __future__ import annotations

import re
from dataclasses import asdict
from typing import Any

from stock_management.application.dtos.authorization import AuthorizationResult
from stock_management.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    IUserRepository,
)
from stock_management.application.interfaces.services import ICacheService
from stock_management.application.services import authorization_policy as policy
from stock_management.core.config import get_settings
from stock_management.domain.entities.permission import PermissionEntity
from stock_management.domain.entities.user import UserEntity
from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import (
    ResourceNotFoundException,
    StockManagementException,
    UnauthorizedException,
)
from stock_management.domain.permission_catalog import (
    PERMISSION_DEFINITIONS,
    Permissions,
)
from stock_management.domain.value_objects.core import is_valid_permission_code
from stock_management.infrastructure.cache.keys import (
    role_permissions_key,
    tenant_role_permissions_pattern,
)
from stock_management.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_CODE_SEPARATORS = re.compile(r"[\s\-.:]+")


def _system_admin_permissions(tenant_id: str) -> list[PermissionEntity]:
    """Every catalog permission, synthesized for SYSTEM_ADMIN (no persisted rows)."""
    return [
        PermissionEntity(
            id=f"system-{d.code.lower()}",
            tenant_id=tenant_id,
            name=d.name,
            code=d.code,
            module=d.module.value,
            description=d.description,
            is_system_defined=True,
        )
        for d in PERMISSION_DEFINITIONS
    ]


def _to_cache(permissions: list[PermissionEntity]) -> list[dict[str, Any]]:
    return [asdict(p) for p in permissions]


def _from_cache(cached: list[dict[str, Any]]) -> list[PermissionEntity]:
    return [PermissionEntity(**item) for item in cached]


def resource_action_code(resource: str, action: str) -> str:
    """Permission code for action on resource, e.g. ("products", "view") -> "VIEW_PRODUCTS"."""
    parts = [_CODE_SEPARATORS.sub("_", part.strip()) for part in (action, resource)]
    return "_".join(parts).upper()


class AuthorizationService:
    """Permission resolution and checks for a user; caches role grants when a cache is available.

    Grants are cached per (tenant_id, role), not per user: all users sharing a
    role in a tenant share the same grants. Tenant isolation is never cached.
    SYSTEM_ADMIN holds every permission, including tenant-defined ones, and
    its checks never consult grants.
    """

    def __init__(
        self,
        role_permission_repo: IRolePermissionRepository,
        cache: ICacheService | None = None,
        cache_ttl: int | None = None,
        user_repo: IUserRepository | None = None,
        permission_repo: IPermissionRepository | None = None,
    ) -> None:
        self.role_permission_repo = role_permission_repo
        self.cache = cache
        self.cache_ttl = (
            cache_ttl if cache_ttl is not None else get_settings().cache_ttl_permissions
        )
        self.user_repo = user_repo
        self.permission_repo = permission_repo

    async def load_user(self, user_id: str, tenant_id: str) -> UserEntity:
        """Return the active user for authorization checks.

        Raises:
            ResourceNotFoundException: If no user repository is configured or the user is missing.
            UnauthorizedException: If the user is inactive.
        """
        if self.user_repo is None:
            raise ResourceNotFoundException("user", user_id)
        user = await self.user_repo.get_by_id_and_tenant(user_id, tenant_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if not user.is_active:
            logger.info("Inactive user rejected: user=%s tenant=%s", user_id, tenant_id)
            raise UnauthorizedException(
                f"User '{user_id}' is inactive", user_id=user_id, tenant_id=tenant_id
            )
        return user

    async def _system_admin_role_permissions(self, tenant_id: str) -> list[PermissionEntity]:
        by_code = {p.code: p for p in _system_admin_permissions(tenant_id)}
        if self.permission_repo is not None:
            for permission in await self.permission_repo.get_by_tenant(tenant_id):
                by_code[permission.code] = permission
        return list(by_code.values())

    async def _read_cached(self, key: str) -> list[PermissionEntity] | None:
        cached = await self.cache.get(key)
        if cached is None:
            return None
        try:
            return _from_cache(cached)
        except (TypeError, StockManagementException):
            logger.warning("Discarding unreadable cache entry %s", key)
            await self.cache.delete(key)
            return None

    async def get_role_permissions(
        self, tenant_id: str, role: UserRole
    ) -> list[PermissionEntity]:
        """Return permissions granted to role in tenant. Uses cache if available."""
        if role is UserRole.SYSTEM_ADMIN:
            return await self._system_admin_role_permissions(tenant_id)

        key = role_permissions_key(tenant_id, role)
        if self.cache and self.cache.is_available():
            cached = await self._read_cached(key)
            if cached is not None:
                return cached

        permissions = await self.role_permission_repo.get_permissions_for_role(
            tenant_id, role
        )
        if self.cache and self.cache.is_available():
            await self.cache.set(key, _to_cache(permissions), ttl=self.cache_ttl)
        return permissions

    async def get_user_permissions(self, user: UserEntity) -> list[PermissionEntity]:
        """Return the permissions the user holds in their own tenant."""
        return await self.get_role_permissions(user.tenant_id, user.role)

    async def get_user_permission_codes(self, user: UserEntity) -> set[str]:
        """Return permission codes the user holds (e.g. {'VIEW_PRODUCTS'})."""
        return {p.code for p in await self.get_user_permissions(user)}

    async def has_permission(self, user: UserEntity, permission_code: str) -> bool:
        if user.is_system_admin:
            return True
        permissions = await self.get_user_permissions(user)
        return policy.has_any_permission(user, permissions, permission_code)

    async def require_permission(self, user: UserEntity, permission_code: str) -> None:
        """Raise UnauthorizedException if user lacks permission_code."""
        if user.is_system_admin:
            return
        permissions = await self.get_user_permissions(user)
        try:
            policy.ensure_has_permission(user, permissions, permission_code)
        except UnauthorizedException:
            logger.info(
                "Permission denied: user=%s tenant=%s role=%s permission=%s",
                user.id,
                user.tenant_id,
                user.role,
                permission_code,
            )
            raise

    async def check_authorization(
        self, user: UserEntity, *permission_codes: str
    ) -> AuthorizationResult:
        """Return an AuthorizationResult listing required and missing permissions."""
        if user.is_system_admin:
            return AuthorizationResult.allowed(permission_codes)
        permissions = await self.get_user_permissions(user)
        result = policy.check_permissions(user, permissions, *permission_codes)
        if not result.is_authorized:
            logger.info(
                "Authorization check failed: user=%s tenant=%s missing=%s",
                user.id,
                user.tenant_id,
                sorted(result.missing_permissions),
            )
        return result

    async def validate_user_access(
        self, user: UserEntity, resource: str, action: str
    ) -> bool:
        """Return True if user may perform action on resource.

        The pair maps to the permission code ACTION_RESOURCE, so
        ("stock movement", "create") checks CREATE_STOCK_MOVEMENT. Pairs that
        do not form a valid code are denied.
        """
        code = resource_action_code(resource, action)
        if not resource.strip() or not action.strip() or not is_valid_permission_code(code):
            logger.info("Access denied for malformed resource/action %r/%r", resource, action)
            return False
        return await self.has_permission(user, code)

    async def can_create_stock_movement(self, user: UserEntity) -> bool:
        return await self.has_permission(user, Permissions.CREATE_STOCK_MOVEMENT)

    async def can_view_reports(self, user: UserEntity) -> bool:
        return await self.has_permission(user, Permissions.VIEW_STOCK_REPORTS)

    def ensure_can_manage_movement_types(self, user: UserEntity) -> None:
        """Role-based gate for movement type management (no permission lookup)."""
        policy.ensure_can_manage_movement_types(user)

    async def role_has_permission(
        self,
        user: UserEntity,
        tenant_id: str,
        role: UserRole,
        permission_code: str,
    ) -> bool:
        """Return True if role holds permission_code in tenant. user must be able to access tenant."""
        policy.ensure_can_access_tenant(user, tenant_id)
        if role is UserRole.SYSTEM_ADMIN:
            return True
        permissions = await self.get_role_permissions(tenant_id, role)
        return policy.has_any_permission(user, permissions, permission_code)

    async def invalidate_role_cache(self, tenant_id: str, role: UserRole) -> None:
        """Invalidate cached grants for one role in tenant."""
        if self.cache and self.cache.is_available():
            await self.cache.delete(role_permissions_key(tenant_id, role))

    async def invalidate_tenant_cache(self, tenant_id: str) -> None:
        """Invalidate cached grants for every role in tenant."""
        if self.cache and self.cache.is_available():
            await self.cache.delete_pattern(tenant_role_permissions_pattern(tenant_id))
