"""User domain entity (authorization view).

A user owns exactly one role and belongs to exactly one tenant. SYSTEM_ADMIN
users are the only ones exempt from tenant scoping.
"""

from dataclasses import dataclass

from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import ValidationException

_MOVEMENT_TYPE_MANAGER_ROLES = frozenset(
    {UserRole.SYSTEM_ADMIN, UserRole.TENANT_ADMIN, UserRole.MANAGER}
)


@dataclass
class UserEntity:
    """Domain entity for a user, carrying what authorization needs.

    The policy guards do not look at is_active; AuthorizationService.load_user
    rejects inactive users before any check runs.
    """

    id: str
    tenant_id: str
    role: UserRole
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate user business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("User ID is required", field="id")
        if not self.tenant_id:
            raise ValidationException("Tenant ID is required", field="tenant_id")
        if not isinstance(self.role, UserRole):
            raise ValidationException(f"Invalid role: {self.role!r}", field="role")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_system_admin(self) -> bool:
        return self.role is UserRole.SYSTEM_ADMIN

    def can_manage_movement_types(self) -> bool:
        """Return True for SYSTEM_ADMIN, TENANT_ADMIN and MANAGER."""
        return self.role in _MOVEMENT_TYPE_MANAGER_ROLES
