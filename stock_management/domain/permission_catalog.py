"""Permission catalog and default role grants.

Closed set of permission codes grouped by module, the display definitions
used to seed a tenant, and the baseline role -> permissions mapping applied
once at tenant initialization. All tables are immutable; read them through
the accessor functions.
"""

from dataclasses import dataclass
from types import MappingProxyType

from stock_management.domain.enums import PermissionModule, UserRole
from stock_management.domain.exceptions import ResourceNotFoundException
from stock_management.domain.value_objects.core import is_valid_permission_code

__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "PERMISSION_DEFINITIONS",
    "PermissionDefinition",
    "Permissions",
    "all_permission_codes",
    "default_permissions_for",
    "get_permission_definition",
    "is_valid_permission_code",
    "permission_codes_for_module",
    "seeded_roles",
]


class Permissions:
    """Permission code constants."""

    # Stock
    MANAGE_MOVEMENT_TYPES = "MANAGE_MOVEMENT_TYPES"
    CREATE_STOCK_MOVEMENT = "CREATE_STOCK_MOVEMENT"
    VIEW_STOCK_REPORTS = "VIEW_STOCK_REPORTS"

    # Product
    MANAGE_PRODUCTS = "MANAGE_PRODUCTS"
    VIEW_PRODUCTS = "VIEW_PRODUCTS"

    # User
    MANAGE_USERS = "MANAGE_USERS"
    VIEW_USERS = "VIEW_USERS"

    # Supplier
    MANAGE_SUPPLIERS = "MANAGE_SUPPLIERS"
    VIEW_SUPPLIERS = "VIEW_SUPPLIERS"

    # System
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    TENANT_ADMIN = "TENANT_ADMIN"


@dataclass(frozen=True)
class PermissionDefinition:
    """Catalog entry used to create a system-defined permission for a tenant."""

    code: str
    name: str
    module: PermissionModule
    description: str


PERMISSION_DEFINITIONS: tuple[PermissionDefinition, ...] = (
    PermissionDefinition(
        Permissions.MANAGE_MOVEMENT_TYPES,
        "Manage movement types",
        PermissionModule.STOCK,
        "Create, update and delete stock movement types",
    ),
    PermissionDefinition(
        Permissions.CREATE_STOCK_MOVEMENT,
        "Create stock movements",
        PermissionModule.STOCK,
        "Record stock in/out movements",
    ),
    PermissionDefinition(
        Permissions.VIEW_STOCK_REPORTS,
        "View stock reports",
        PermissionModule.STOCK,
        "View stock reports and analytics",
    ),
    PermissionDefinition(
        Permissions.MANAGE_PRODUCTS,
        "Manage products",
        PermissionModule.PRODUCT,
        "Create, update and delete products",
    ),
    PermissionDefinition(
        Permissions.VIEW_PRODUCTS,
        "View products",
        PermissionModule.PRODUCT,
        "View products and product information",
    ),
    PermissionDefinition(
        Permissions.MANAGE_USERS,
        "Manage users",
        PermissionModule.USER,
        "Create, update and delete users within the tenant",
    ),
    PermissionDefinition(
        Permissions.VIEW_USERS,
        "View users",
        PermissionModule.USER,
        "View users within the tenant",
    ),
    PermissionDefinition(
        Permissions.MANAGE_SUPPLIERS,
        "Manage suppliers",
        PermissionModule.SUPPLIER,
        "Create, update and delete suppliers",
    ),
    PermissionDefinition(
        Permissions.VIEW_SUPPLIERS,
        "View suppliers",
        PermissionModule.SUPPLIER,
        "View suppliers and supplier information",
    ),
    PermissionDefinition(
        Permissions.SYSTEM_ADMIN,
        "System administrator",
        PermissionModule.SYSTEM,
        "Full access across all tenants",
    ),
    PermissionDefinition(
        Permissions.TENANT_ADMIN,
        "Tenant administrator",
        PermissionModule.SYSTEM,
        "Full access within the tenant",
    ),
)

_DEFINITIONS_BY_CODE: MappingProxyType[str, PermissionDefinition] = MappingProxyType(
    {d.code: d for d in PERMISSION_DEFINITIONS}
)

# SYSTEM_ADMIN has no seeded rows: it is resolved to every code at request time.
DEFAULT_ROLE_PERMISSIONS: MappingProxyType[UserRole, frozenset[str]] = MappingProxyType(
    {
        UserRole.TENANT_ADMIN: frozenset(
            {
                Permissions.MANAGE_MOVEMENT_TYPES,
                Permissions.CREATE_STOCK_MOVEMENT,
                Permissions.VIEW_STOCK_REPORTS,
                Permissions.MANAGE_PRODUCTS,
                Permissions.MANAGE_USERS,
                Permissions.MANAGE_SUPPLIERS,
                Permissions.TENANT_ADMIN,
            }
        ),
        UserRole.MANAGER: frozenset(
            {
                Permissions.MANAGE_MOVEMENT_TYPES,
                Permissions.CREATE_STOCK_MOVEMENT,
                Permissions.VIEW_STOCK_REPORTS,
                Permissions.MANAGE_PRODUCTS,
                Permissions.VIEW_USERS,
            }
        ),
        UserRole.EMPLOYEE: frozenset(
            {
                Permissions.CREATE_STOCK_MOVEMENT,
                Permissions.VIEW_PRODUCTS,
                Permissions.VIEW_STOCK_REPORTS,
            }
        ),
        UserRole.READ_ONLY: frozenset(
            {
                Permissions.VIEW_PRODUCTS,
                Permissions.VIEW_STOCK_REPORTS,
            }
        ),
    }
)


def all_permission_codes() -> frozenset[str]:
    """Return every code in the catalog."""
    return frozenset(_DEFINITIONS_BY_CODE)


def permission_codes_for_module(module: PermissionModule | str) -> frozenset[str]:
    """Return the catalog codes belonging to module (e.g. 'Stock')."""
    module_value = module.value if isinstance(module, PermissionModule) else module
    return frozenset(
        d.code for d in PERMISSION_DEFINITIONS if d.module.value == module_value
    )


def get_permission_definition(code: str) -> PermissionDefinition:
    """Return the catalog definition for code.

    Raises:
        ResourceNotFoundException: If code is not in the catalog.
    """
    try:
        return _DEFINITIONS_BY_CODE[code]
    except KeyError:
        raise ResourceNotFoundException("permission", code) from None


def default_permissions_for(role: UserRole) -> frozenset[str]:
    """Return the baseline permission codes seeded for role at tenant initialization.

    SYSTEM_ADMIN returns an empty set (no rows are seeded for it).
    """
    return DEFAULT_ROLE_PERMISSIONS.get(role, frozenset())


def seeded_roles() -> tuple[UserRole, ...]:
    """Roles that receive RolePermission rows at tenant initialization, by rank."""
    return tuple(sorted(DEFAULT_ROLE_PERMISSIONS, key=lambda r: r.rank))
