"""Authorization engine: role hierarchy, tenant isolation and permission guards.

Two separate guard families:

- Role checks (ensure_has_role, ensure_can_manage_movement_types) compare the
  user's role against the fixed hierarchy.
- Permission checks (ensure_has_permission, has_any_permission,
  has_all_permissions, check_permissions) match exact permission codes
  against the permissions the caller resolved for the user (persisted grants,
  possibly customized per tenant). They never derive permissions from the role.

Every function is pure and stateless: no I/O, no logging, no caching.
ensure_* functions raise UnauthorizedException; can_*/has_*/is_* return bool;
check_* return an AuthorizationResult.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from stock_management.application.dtos.authorization import AuthorizationResult
from stock_management.domain.entities.user import UserEntity
from stock_management.domain.enums import RoleComparison, UserRole
from stock_management.domain.exceptions import UnauthorizedException
from stock_management.domain.value_objects.core import is_valid_permission_code

__all__ = [
    "can_user_access_tenant",
    "check_permissions",
    "check_role",
    "check_tenant_access",
    "compare_roles",
    "ensure_can_access_tenant",
    "ensure_can_manage_movement_types",
    "ensure_has_permission",
    "ensure_has_role",
    "has_all_permissions",
    "has_any_permission",
    "is_at_least",
    "is_higher_role",
    "is_valid_permission_code",
]

MOVEMENT_TYPE_MANAGER_MIN_ROLE = UserRole.MANAGER

_MSG_MANAGE_MOVEMENT_TYPES = "User is not authorized to manage movement types"


def _held_codes(user_permissions: Iterable[Any]) -> frozenset[str]:
    """Codes held in user_permissions (entities with .code, or plain code strings)."""
    return frozenset(
        p if isinstance(p, str) else p.code for p in user_permissions
    )


# Role hierarchy


def compare_roles(a: UserRole, b: UserRole) -> RoleComparison:
    """Compare a to b by privilege: HIGHER means a outranks b."""
    if a.rank < b.rank:
        return RoleComparison.HIGHER
    if a.rank > b.rank:
        return RoleComparison.LOWER
    return RoleComparison.EQUAL


def is_at_least(user_role: UserRole, required_role: UserRole) -> bool:
    """Return True if user_role has equal or higher privilege than required_role."""
    return user_role.rank <= required_role.rank


def is_higher_role(current_role: UserRole, target_role: UserRole) -> bool:
    """Return True if current_role has strictly higher privilege than target_role."""
    return current_role.rank < target_role.rank


# Role guards


def ensure_can_manage_movement_types(user: UserEntity) -> None:
    """Allow SYSTEM_ADMIN, TENANT_ADMIN and MANAGER.

    Raises:
        UnauthorizedException: For EMPLOYEE and READ_ONLY.
    """
    if not is_at_least(user.role, MOVEMENT_TYPE_MANAGER_MIN_ROLE):
        raise UnauthorizedException(
            _MSG_MANAGE_MOVEMENT_TYPES,
            role=str(user.role),
            required_role=str(MOVEMENT_TYPE_MANAGER_MIN_ROLE),
        )


def check_role(user: UserEntity, required_role: UserRole) -> AuthorizationResult:
    """Result form of ensure_has_role."""
    if is_at_least(user.role, required_role):
        return AuthorizationResult.allowed()
    return AuthorizationResult.denied(
        f"Role '{required_role}' or higher is required for this operation"
    )


def ensure_has_role(user: UserEntity, required_role: UserRole) -> None:
    """Require user's role to be required_role or higher.

    Raises:
        UnauthorizedException: Message names required_role.
    """
    result = check_role(user, required_role)
    if not result.is_authorized:
        raise UnauthorizedException(
            result.reason or "",
            role=str(user.role),
            required_role=str(required_role),
        )


# Tenant isolation


def can_user_access_tenant(user: UserEntity, target_tenant_id: str) -> bool:
    """Return True if user belongs to target_tenant_id or is SYSTEM_ADMIN."""
    return user.tenant_id == target_tenant_id or user.role is UserRole.SYSTEM_ADMIN


def check_tenant_access(user: UserEntity, target_tenant_id: str) -> AuthorizationResult:
    """Result form of ensure_can_access_tenant."""
    if can_user_access_tenant(user, target_tenant_id):
        return AuthorizationResult.allowed()
    return AuthorizationResult.denied(
        f"User is not authorized to access tenant '{target_tenant_id}'"
    )


def ensure_can_access_tenant(user: UserEntity, target_tenant_id: str) -> None:
    """Require access to target_tenant_id. Re-evaluated on every call.

    Raises:
        UnauthorizedException: Message names target_tenant_id.
    """
    result = check_tenant_access(user, target_tenant_id)
    if not result.is_authorized:
        raise UnauthorizedException(
            result.reason or "",
            role=str(user.role),
            tenant_id=target_tenant_id,
        )


# Permission guards


def check_permissions(
    user: UserEntity,
    user_permissions: Iterable[Any],
    *codes: str,
) -> AuthorizationResult:
    """Return whether user_permissions hold every code, with missing codes listed.

    user is not consulted; permissions are matched by exact code only.
    """
    held = _held_codes(user_permissions)
    missing = [code for code in codes if code not in held]
    if not missing:
        return AuthorizationResult.allowed(codes)
    quoted = ", ".join(f"'{code}'" for code in missing)
    return AuthorizationResult.denied(
        f"Permission {quoted} is required for this operation",
        required=codes,
        missing=missing,
    )


def ensure_has_permission(
    user: UserEntity,
    user_permissions: Iterable[Any],
    required_code: str,
) -> None:
    """Require a permission whose code equals required_code.

    Raises:
        UnauthorizedException: Message names required_code.
    """
    result = check_permissions(user, user_permissions, required_code)
    if not result.is_authorized:
        raise UnauthorizedException(
            result.reason or "",
            role=str(user.role),
            required_permission=required_code,
        )


def has_any_permission(
    user: UserEntity,
    user_permissions: Iterable[Any],
    *codes: str,
) -> bool:
    """Return True if at least one of codes is held. False when codes is empty."""
    held = _held_codes(user_permissions)
    return any(code in held for code in codes)


def has_all_permissions(
    user: UserEntity,
    user_permissions: Iterable[Any],
    *codes: str,
) -> bool:
    """Return True if every one of codes is held. True when codes is empty."""
    held = _held_codes(user_permissions)
    return all(code in held for code in codes)
