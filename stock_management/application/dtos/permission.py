"""DTOs for permission management use cases (no dependency on ORM)."""

from dataclasses import dataclass, field

from stock_management.domain.enums import UserRole


@dataclass(frozen=True)
class PermissionCreate:
    """Input for creating a tenant permission."""

    code: str
    name: str
    module: str
    description: str | None = None


@dataclass(frozen=True)
class PermissionUpdate:
    """Input for updating a permission. None fields are left unchanged; code is immutable."""

    name: str | None = None
    module: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PermissionInfo:
    """Permission read-model with assignment status for one role."""

    id: str
    name: str
    code: str
    module: str
    is_assigned: bool


@dataclass(frozen=True)
class RolePermissionSummary:
    """Role with every tenant permission and whether the role holds it."""

    role: UserRole
    role_name: str
    permissions: list[PermissionInfo] = field(default_factory=list)

    @property
    def total_permissions(self) -> int:
        """Number of permissions assigned to the role."""
        return sum(1 for p in self.permissions if p.is_assigned)
