"""Domain value objects for the Stock Management application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import Any

from stock_management.core.constants import PERMISSION_CODE_MAX_LENGTH

# Uppercase ASCII letters, digits, underscore (e.g. MANAGE_PRODUCTS).
_PERMISSION_CODE_RE = re.compile(r"^[A-Z0-9_]+$")


def is_valid_permission_code(code: Any) -> bool:
    """Return True if code is a well-formed permission code.

    Non-empty, at most PERMISSION_CODE_MAX_LENGTH characters, and made only of
    uppercase letters, digits and underscores. None and non-str values are
    rejected rather than raising.
    """
    if not isinstance(code, str) or not code:
        return False
    if len(code) > PERMISSION_CODE_MAX_LENGTH:
        return False
    return bool(_PERMISSION_CODE_RE.fullmatch(code))


@dataclass(frozen=True)
class PermissionCode:
    """Value object for a permission code (e.g. 'VIEW_PRODUCTS').

    Identity is the string itself; comparison is case-sensitive.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate format.

        Raises:
            ValueError: If empty, too long, or containing characters other
                than uppercase letters, digits and underscores.
        """
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Permission code must be a non-empty string")
        if len(self.value) > PERMISSION_CODE_MAX_LENGTH:
            raise ValueError(
                f"Permission code must not exceed {PERMISSION_CODE_MAX_LENGTH} characters"
            )
        if not _PERMISSION_CODE_RE.fullmatch(self.value):
            raise ValueError(
                "Permission code must be uppercase letters, digits and underscores "
                "(e.g., 'MANAGE_PRODUCTS')"
            )

    def __str__(self) -> str:
        return self.value
