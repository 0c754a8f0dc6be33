"""Application services: authorization policy, authorization, permissions, tenant initialization."""

from stock_management.application.services import authorization_policy
from stock_management.application.services.authorization_decorators import (
    require_permission,
    require_role,
)
from stock_management.application.services.authorization_service import (
    AuthorizationService,
)
from stock_management.application.services.permission_service import PermissionService
from stock_management.application.services.tenant_initialization_service import (
    TenantInitializationService,
)

__all__ = [
    "AuthorizationService",
    "PermissionService",
    "TenantInitializationService",
    "authorization_policy",
    "require_permission",
    "require_role",
]
