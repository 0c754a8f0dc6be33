"""Domain exceptions for the Stock Management application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. A presentation
layer maps them to responses (e.g. UnauthorizedException -> 403).
"""

from typing import Any


class StockManagementException(Exception):
    """Base exception for all Stock Management errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, tenant_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(StockManagementException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnauthorizedException(StockManagementException):
    """Raised when a user lacks the role, permission or tenant access for an operation.

    Deterministic policy decision: callers must not retry. The message always
    names the missing role, permission code or tenant id.
    """

    def __init__(self, message: str = "Not authorized", **details: Any) -> None:
        """Initialize with message and optional context.

        Args:
            message: Human-readable reason.
            **details: Machine-readable context (required_role, required_permission,
                tenant_id, role).
        """
        super().__init__(message, "UNAUTHORIZED", details)


class ResourceNotFoundException(StockManagementException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'permission', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TenantNotFoundException(StockManagementException):
    """Raised when a requested tenant is not found."""

    def __init__(self, tenant_id: str) -> None:
        super().__init__(
            f"Tenant not found: {tenant_id}",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class DuplicateAssignmentException(StockManagementException):
    """Raised when granting a permission the role already holds in the tenant."""

    def __init__(self, message: str, details_extra: dict[str, Any] | None = None) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description (e.g. 'Permission already assigned to role').
            details_extra: Optional extra keys (e.g. role, permission_id).
        """
        details = dict(details_extra or {})
        details["assignment_type"] = "role_permission"
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class SystemDefinedPermissionException(StockManagementException):
    """Raised when deleting a permission created by tenant initialization."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Permission '{code}' is system-defined and cannot be deleted",
            "SYSTEM_DEFINED_PERMISSION",
            {"code": code},
        )


class PermissionInUseException(StockManagementException):
    """Raised when deleting a permission that is still granted to a role."""

    def __init__(self, code: str, roles: list[str]) -> None:
        super().__init__(
            f"Permission '{code}' is still granted to: {', '.join(roles)}",
            "PERMISSION_IN_USE",
            {"code": code, "roles": roles},
        )
