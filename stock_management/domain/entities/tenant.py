"""Tenant domain entity.

Represents the business concept of a tenant, independent of persistence.
"""

from dataclasses import dataclass

from stock_management.core.tenant_validation import is_valid_tenant_id_format
from stock_management.domain.exceptions import ValidationException


@dataclass
class TenantEntity:
    """Domain entity for tenant. Validation runs on construction."""

    id: str
    code: str
    name: str
    is_enabled: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate tenant business rules. Raises ValidationException if invalid."""
        if not is_valid_tenant_id_format(self.id):
            raise ValidationException(f"Invalid tenant ID: {self.id!r}", field="id")
        if not self.code or not self.code.strip():
            raise ValidationException("Tenant code is required", field="code")
        if not self.name or not self.name.strip():
            raise ValidationException("Tenant name is required", field="name")

    def enable(self) -> None:
        """Enable tenant. Idempotent."""
        self.is_enabled = True

    def disable(self) -> None:
        """Disable tenant. Idempotent."""
        self.is_enabled = False
