"""Pytest configuration and fixtures for stock_management.

In-memory fake repositories implement the application ports so services can
be exercised without persistence.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from stock_management.core.config import get_settings
from stock_management.domain.entities import (
    PermissionEntity,
    RolePermissionEntity,
    TenantEntity,
    UserEntity,
)
from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import DuplicateAssignmentException

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"


class FakePermissionRepository:
    """Dict-backed IPermissionRepository."""

    def __init__(self) -> None:
        self.items: dict[str, PermissionEntity] = {}

    async def get_by_id_and_tenant(self, permission_id, tenant_id):
        p = self.items.get(permission_id)
        return p if p is not None and p.tenant_id == tenant_id else None

    async def get_by_code_and_tenant(self, code, tenant_id):
        for p in self.items.values():
            if p.code == code and p.tenant_id == tenant_id:
                return p
        return None

    async def get_by_tenant(self, tenant_id, module=None):
        return [
            p
            for p in self.items.values()
            if p.tenant_id == tenant_id and (module is None or p.module == module)
        ]

    async def exists_for_tenant(self, tenant_id):
        return any(p.tenant_id == tenant_id for p in self.items.values())

    async def create_permission(self, permission):
        self.items[permission.id] = permission
        return permission

    async def create_permissions_bulk(self, permissions):
        for p in permissions:
            self.items[p.id] = p
        return list(permissions)

    async def update_permission(self, permission):
        self.items[permission.id] = permission
        return permission

    async def delete_permission(self, permission_id, tenant_id):
        p = self.items.get(permission_id)
        if p is None or p.tenant_id != tenant_id:
            return False
        del self.items[permission_id]
        return True


class FakeRolePermissionRepository:
    """List-backed IRolePermissionRepository enforcing (tenant, role, permission) uniqueness."""

    def __init__(self, permission_repo: FakePermissionRepository) -> None:
        self.permission_repo = permission_repo
        self.grants: list[RolePermissionEntity] = []
        self.get_permissions_calls = 0

    async def get_permissions_for_role(self, tenant_id, role):
        self.get_permissions_calls += 1
        return [
            self.permission_repo.items[g.permission_id]
            for g in self.grants
            if g.tenant_id == tenant_id and g.role is role
        ]

    async def get_by_role(self, tenant_id, role):
        return [g for g in self.grants if g.tenant_id == tenant_id and g.role is role]

    async def get_by_permission_id(self, tenant_id, permission_id):
        return [
            g
            for g in self.grants
            if g.tenant_id == tenant_id and g.permission_id == permission_id
        ]

    async def assign_permission_to_role(self, grant):
        if any(g.grant_key == grant.grant_key for g in self.grants):
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                {"role": str(grant.role), "permission_id": grant.permission_id},
            )
        self.grants.append(grant)
        return grant

    async def remove_permission_from_role(self, tenant_id, role, permission_id):
        before = len(self.grants)
        self.grants = [
            g for g in self.grants if g.grant_key != (tenant_id, role, permission_id)
        ]
        return len(self.grants) < before


class FakeTenantRepository:
    def __init__(self, tenants: list[TenantEntity] | None = None) -> None:
        self.tenants = {t.id: t for t in tenants or []}

    async def get_by_id(self, tenant_id):
        return self.tenants.get(tenant_id)


@pytest.fixture
def permission_repo() -> FakePermissionRepository:
    return FakePermissionRepository()


@pytest.fixture
def role_permission_repo(permission_repo) -> FakeRolePermissionRepository:
    return FakeRolePermissionRepository(permission_repo)


@pytest.fixture
def make_user() -> Callable[..., UserEntity]:
    """Factory: make_user(role, tenant_id=TENANT_A)."""

    def _make(role: UserRole, tenant_id: str = TENANT_A, user_id: str = "u1") -> UserEntity:
        return UserEntity(id=user_id, tenant_id=tenant_id, role=role)

    return _make


@pytest.fixture
def tenant_admin(make_user) -> UserEntity:
    return make_user(UserRole.TENANT_ADMIN)


@pytest.fixture
def system_admin(make_user) -> UserEntity:
    return make_user(UserRole.SYSTEM_ADMIN, tenant_id=get_settings().system_tenant_id)


@pytest.fixture
def make_permission() -> Callable[..., PermissionEntity]:
    """Factory: make_permission(code, tenant_id=TENANT_A, ...)."""
    return _make_permission


def _make_permission(
    code: str,
    tenant_id: str = TENANT_A,
    permission_id: str | None = None,
    is_system_defined: bool = False,
    module: str = "Stock",
) -> PermissionEntity:
    return PermissionEntity(
        id=permission_id or f"p-{code.lower()}",
        tenant_id=tenant_id,
        name=code.replace("_", " ").title(),
        code=code,
        module=module,
        is_system_defined=is_system_defined,
    )


@pytest.fixture
def make_tenant_repo() -> Callable[..., FakeTenantRepository]:
    """Factory: make_tenant_repo(*tenant_ids) with enabled tenants."""

    def _make(*tenant_ids: str) -> FakeTenantRepository:
        return FakeTenantRepository(
            [TenantEntity(id=t, code=t.upper(), name=t) for t in tenant_ids]
        )

    return _make
