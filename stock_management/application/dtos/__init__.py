"""Application DTOs (no ORM dependency)."""

from stock_management.application.dtos.authorization import AuthorizationResult
from stock_management.application.dtos.permission import (
    PermissionCreate,
    PermissionInfo,
    PermissionUpdate,
    RolePermissionSummary,
)

__all__ = [
    "AuthorizationResult",
    "PermissionCreate",
    "PermissionInfo",
    "PermissionUpdate",
    "RolePermissionSummary",
]
