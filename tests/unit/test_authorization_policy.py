"""Tests for the authorization policy functions (role, tenant and permission guards)."""

import itertools

import pytest

from stock_management.application.services.authorization_policy import (
    can_user_access_tenant,
    check_permissions,
    check_role,
    check_tenant_access,
    compare_roles,
    ensure_can_access_tenant,
    ensure_can_manage_movement_types,
    ensure_has_permission,
    ensure_has_role,
    has_all_permissions,
    has_any_permission,
    is_at_least,
    is_higher_role,
)
from stock_management.domain.enums import RoleComparison, UserRole
from stock_management.domain.exceptions import UnauthorizedException


class TestRoleHierarchy:
    def test_is_at_least_for_all_pairs(self) -> None:
        for a, b in itertools.product(UserRole, repeat=2):
            assert is_at_least(a, b) == (a.rank <= b.rank)

    def test_is_higher_role_is_strict(self) -> None:
        assert is_higher_role(UserRole.SYSTEM_ADMIN, UserRole.READ_ONLY)
        assert is_higher_role(UserRole.MANAGER, UserRole.EMPLOYEE)
        assert not is_higher_role(UserRole.MANAGER, UserRole.MANAGER)
        assert not is_higher_role(UserRole.EMPLOYEE, UserRole.MANAGER)

    def test_compare_roles(self) -> None:
        assert compare_roles(UserRole.SYSTEM_ADMIN, UserRole.TENANT_ADMIN) is RoleComparison.HIGHER
        assert compare_roles(UserRole.READ_ONLY, UserRole.EMPLOYEE) is RoleComparison.LOWER
        assert compare_roles(UserRole.MANAGER, UserRole.MANAGER) is RoleComparison.EQUAL

    def test_strict_order(self) -> None:
        ordered = [
            UserRole.SYSTEM_ADMIN,
            UserRole.TENANT_ADMIN,
            UserRole.MANAGER,
            UserRole.EMPLOYEE,
            UserRole.READ_ONLY,
        ]
        for higher, lower in zip(ordered, ordered[1:]):
            assert is_higher_role(higher, lower)


class TestEnsureCanManageMovementTypes:
    @pytest.mark.parametrize(
        "role", [UserRole.SYSTEM_ADMIN, UserRole.TENANT_ADMIN, UserRole.MANAGER]
    )
    def test_allowed(self, make_user, role) -> None:
        ensure_can_manage_movement_types(make_user(role))

    @pytest.mark.parametrize("role", [UserRole.EMPLOYEE, UserRole.READ_ONLY])
    def test_denied(self, make_user, role) -> None:
        with pytest.raises(UnauthorizedException) as exc_info:
            ensure_can_manage_movement_types(make_user(role))
        assert "not authorized to manage movement types" in exc_info.value.message
        assert exc_info.value.error_code == "UNAUTHORIZED"


class TestEnsureHasRole:
    def test_equal_role_passes(self, make_user) -> None:
        ensure_has_role(make_user(UserRole.MANAGER), UserRole.MANAGER)

    def test_higher_role_passes(self, make_user) -> None:
        ensure_has_role(make_user(UserRole.TENANT_ADMIN), UserRole.EMPLOYEE)

    def test_lower_role_fails_with_role_in_message(self, make_user) -> None:
        with pytest.raises(UnauthorizedException) as exc_info:
            ensure_has_role(make_user(UserRole.EMPLOYEE), UserRole.MANAGER)
        assert "Manager" in str(exc_info.value)
        assert exc_info.value.details["required_role"] == "Manager"

    def test_check_role_result(self, make_user) -> None:
        assert check_role(make_user(UserRole.READ_ONLY), UserRole.READ_ONLY).is_authorized
        denied = check_role(make_user(UserRole.READ_ONLY), UserRole.TENANT_ADMIN)
        assert not denied.is_authorized
        assert "TenantAdmin" in (denied.reason or "")


class TestTenantIsolation:
    def test_same_tenant(self, make_user) -> None:
        assert can_user_access_tenant(make_user(UserRole.EMPLOYEE, "a"), "a")

    @pytest.mark.parametrize(
        "role",
        [UserRole.TENANT_ADMIN, UserRole.MANAGER, UserRole.EMPLOYEE, UserRole.READ_ONLY],
    )
    def test_other_tenant_denied_for_non_system_admin(self, make_user, role) -> None:
        assert not can_user_access_tenant(make_user(role, "a"), "b")

    def test_system_admin_any_tenant(self, make_user) -> None:
        user = make_user(UserRole.SYSTEM_ADMIN, "a")
        assert can_user_access_tenant(user, "z")
        assert can_user_access_tenant(user, "never-seen-before")

    def test_ensure_message_contains_tenant(self, make_user) -> None:
        with pytest.raises(UnauthorizedException) as exc_info:
            ensure_can_access_tenant(make_user(UserRole.TENANT_ADMIN, "a"), "tenant-zz")
        assert "tenant-zz" in exc_info.value.message
        assert exc_info.value.details["tenant_id"] == "tenant-zz"

    def test_ensure_passes_for_own_tenant(self, make_user) -> None:
        ensure_can_access_tenant(make_user(UserRole.READ_ONLY, "a"), "a")

    def test_check_tenant_access(self, make_user) -> None:
        assert check_tenant_access(make_user(UserRole.MANAGER, "a"), "a").is_authorized
        assert not check_tenant_access(make_user(UserRole.MANAGER, "a"), "b").is_authorized


class TestPermissionGuards:
    def test_ensure_has_permission_round_trip(self, make_user, make_permission) -> None:
        user = make_user(UserRole.EMPLOYEE)
        perms = [make_permission("VIEW_PRODUCTS")]
        ensure_has_permission(user, perms, "VIEW_PRODUCTS")
        with pytest.raises(UnauthorizedException) as exc_info:
            ensure_has_permission(user, perms, "MANAGE_PRODUCTS")
        assert "MANAGE_PRODUCTS" in exc_info.value.message
        assert exc_info.value.details["required_permission"] == "MANAGE_PRODUCTS"

    def test_permission_match_ignores_role(self, make_user, make_permission) -> None:
        """A READ_ONLY user granted MANAGE_PRODUCTS passes; a TENANT_ADMIN without it fails."""
        perms = [make_permission("MANAGE_PRODUCTS")]
        ensure_has_permission(make_user(UserRole.READ_ONLY), perms, "MANAGE_PRODUCTS")
        with pytest.raises(UnauthorizedException):
            ensure_has_permission(make_user(UserRole.TENANT_ADMIN), [], "MANAGE_PRODUCTS")

    def test_match_is_case_sensitive(self, make_user, make_permission) -> None:
        with pytest.raises(UnauthorizedException):
            ensure_has_permission(
                make_user(UserRole.EMPLOYEE), [make_permission("VIEW_PRODUCTS")], "view_products"
            )

    def test_has_all_permissions(self, make_user) -> None:
        user = make_user(UserRole.EMPLOYEE)
        assert has_all_permissions(user, ["A", "B"], "A", "B")
        assert not has_all_permissions(user, ["A"], "A", "B")
        assert has_all_permissions(user, [])

    def test_has_any_permission(self, make_user, make_permission) -> None:
        user = make_user(UserRole.EMPLOYEE)
        assert has_any_permission(user, ["A"], "A", "B")
        assert not has_any_permission(user, ["C"], "A", "B")
        assert not has_any_permission(user, ["A"])
        assert has_any_permission(user, [make_permission("VIEW_USERS")], "VIEW_USERS")

    def test_check_permissions_lists_missing(self, make_user) -> None:
        result = check_permissions(make_user(UserRole.EMPLOYEE), ["A"], "A", "B", "C")
        assert not result.is_authorized
        assert result.required_permissions == {"A", "B", "C"}
        assert result.missing_permissions == {"B", "C"}
        assert "'B'" in (result.reason or "")

    def test_check_permissions_allowed(self, make_user) -> None:
        result = check_permissions(make_user(UserRole.EMPLOYEE), ["A", "B"], "A")
        assert result.is_authorized
        assert result.reason is None
        assert result.missing_permissions == frozenset()


def test_checks_are_idempotent(make_user, make_permission) -> None:
    user = make_user(UserRole.MANAGER, "a")
    perms = [make_permission("VIEW_PRODUCTS")]
    for _ in range(2):
        assert can_user_access_tenant(user, "b") is False
        assert has_any_permission(user, perms, "VIEW_PRODUCTS") is True
        assert check_permissions(user, perms, "MANAGE_USERS") == check_permissions(
            user, perms, "MANAGE_USERS"
        )
        with pytest.raises(UnauthorizedException):
            ensure_can_access_tenant(user, "b")
