"""Application ports (repository and service protocols)."""

from stock_management.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    ITenantRepository,
    IUserRepository,
)
from stock_management.application.interfaces.services import (
    ICacheService,
    ITenantInitializationService,
)

__all__ = [
    "ICacheService",
    "IPermissionRepository",
    "IRolePermissionRepository",
    "ITenantInitializationService",
    "ITenantRepository",
    "IUserRepository",
]
