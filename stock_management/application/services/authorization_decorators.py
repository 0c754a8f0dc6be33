"""Declarative guards for async service methods.

Usage:
    class StockMovementService:
        def __init__(self, authorization_service: AuthorizationService) -> None:
            self.authorization_service = authorization_service

        @require_role(UserRole.EMPLOYEE)
        @require_permission(Permissions.CREATE_STOCK_MOVEMENT)
        async def create_movement(self, user: UserEntity, ...) -> ...:
            ...

The decorated function must take a ``user`` parameter (positional or
keyword). require_permission resolves permissions through an
AuthorizationService found as ``args[0].authorization_service`` or as
``args[0]`` itself; a missing service is a wiring error and raises TypeError
instead of skipping the check.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

from stock_management.application.services import authorization_policy as policy
from stock_management.application.services.authorization_service import (
    AuthorizationService,
)
from stock_management.domain.entities.user import UserEntity
from stock_management.domain.enums import UserRole
from stock_management.domain.exceptions import UnauthorizedException
from stock_management.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _user_signature(func: Callable[..., Any]) -> inspect.Signature:
    signature = inspect.signature(func)
    if "user" not in signature.parameters:
        raise TypeError(f"{func.__qualname__} must take a 'user' parameter")
    return signature


def _resolve_user(
    signature: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> UserEntity:
    user = signature.bind(*args, **kwargs).arguments["user"]
    if not isinstance(user, UserEntity):
        raise TypeError(f"Expected UserEntity for 'user', got {type(user).__name__}")
    return user


def _resolve_authorization(args: tuple[Any, ...]) -> AuthorizationService:
    """Resolution order: args[0] if AuthorizationService, then args[0].authorization_service."""
    if args:
        first = args[0]
        if isinstance(first, AuthorizationService):
            return first
        service = getattr(first, "authorization_service", None)
        if isinstance(service, AuthorizationService):
            return service
    raise TypeError("require_permission needs an AuthorizationService on the decorated instance")


def require_permission(
    *permission_codes: str, require_all: bool = False
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator: the acting user must hold any (or, with require_all, every) permission code.

    Raises:
        ValueError: If no permission code is given.
        UnauthorizedException: At call time, when the user lacks the permissions.
    """
    if not permission_codes:
        raise ValueError("require_permission needs at least one permission code")
    codes = tuple(dict.fromkeys(permission_codes))

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = _user_signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            user = _resolve_user(signature, args, kwargs)
            authorization = _resolve_authorization(args)
            if require_all:
                result = await authorization.check_authorization(user, *codes)
                if not result.is_authorized:
                    raise UnauthorizedException(
                        result.reason or "Not authorized",
                        required_permissions=sorted(result.required_permissions),
                        missing_permissions=sorted(result.missing_permissions),
                    )
            elif not any([await authorization.has_permission(user, code) for code in codes]):
                quoted = ", ".join(f"'{code}'" for code in codes)
                logger.info(
                    "Permission denied on %s: user=%s tenant=%s any_of=%s",
                    func.__qualname__,
                    user.id,
                    user.tenant_id,
                    list(codes),
                )
                raise UnauthorizedException(
                    f"One of permission {quoted} is required for this operation",
                    required_permissions=list(codes),
                )
            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_role(
    minimum_role: UserRole,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator: the acting user's role must be minimum_role or higher."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = _user_signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            policy.ensure_has_role(_resolve_user(signature, args, kwargs), minimum_role)
            return await func(*args, **kwargs)

        return wrapper

    return decorator
