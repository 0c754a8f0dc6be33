"""Domain enumerations for the Stock Management application.

UserRole is the role hierarchy used by the authorization engine. Its members
carry an integer rank where a LOWER rank means MORE privilege
(SYSTEM_ADMIN=1 ... READ_ONLY=5). Ordering operators are deliberately not
defined on UserRole; use is_at_least / is_strictly_higher_than instead.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to Enums."""

    @classmethod
    def values(cls) -> list:
        """Return all member values (e.g. for validation or serialization)."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, Enum):
    """Role hierarchy, ranked ascending by privilege (1 = highest)."""

    SYSTEM_ADMIN = 1
    TENANT_ADMIN = 2
    MANAGER = 3
    EMPLOYEE = 4
    READ_ONLY = 5

    @property
    def rank(self) -> int:
        """Integer rank; smaller means more privileged."""
        return self.value

    @property
    def label(self) -> str:
        """Display name (e.g. 'TenantAdmin')."""
        return _ROLE_LABELS[self]

    def is_at_least(self, required: "UserRole") -> bool:
        """Return True if this role has equal or higher privilege than required."""
        return self.rank <= required.rank

    def is_strictly_higher_than(self, other: "UserRole") -> bool:
        """Return True if this role has strictly higher privilege than other."""
        return self.rank < other.rank

    @classmethod
    def from_rank(cls, rank: int) -> "UserRole":
        """Resolve a role from its rank.

        Raises:
            ValueError: If rank is not a defined role (data-integrity defect).
        """
        return cls(rank)

    @classmethod
    def from_label(cls, label: str) -> "UserRole":
        """Resolve a role from its display name (e.g. 'Manager').

        Raises:
            ValueError: If label does not name a role.
        """
        for role, role_label in _ROLE_LABELS.items():
            if role_label == label:
                return role
        raise ValueError(f"Unknown role label: {label!r}")

    def __str__(self) -> str:
        return self.label


_ROLE_LABELS: dict[UserRole, str] = {
    UserRole.SYSTEM_ADMIN: "SystemAdmin",
    UserRole.TENANT_ADMIN: "TenantAdmin",
    UserRole.MANAGER: "Manager",
    UserRole.EMPLOYEE: "Employee",
    UserRole.READ_ONLY: "ReadOnly",
}


class RoleComparison(_ValuesMixin, str, Enum):
    """Outcome of comparing two roles, from the first role's point of view."""

    HIGHER = "higher"
    LOWER = "lower"
    EQUAL = "equal"


class PermissionModule(_ValuesMixin, str, Enum):
    """Functional module a permission belongs to (grouping tag)."""

    STOCK = "Stock"
    PRODUCT = "Product"
    USER = "User"
    SUPPLIER = "Supplier"
    SYSTEM = "System"
