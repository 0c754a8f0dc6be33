"""Tenant id format checks.

Tenant ids end up in cache keys and grant lookups, so only letters, digits,
hyphen and underscore are accepted (no ":" key separator, no whitespace).
"""

import re
from typing import Any

TENANT_ID_MAX_LENGTH = 64
_TENANT_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_tenant_id_format(value: Any) -> bool:
    """Return True if value is a non-empty str of at most TENANT_ID_MAX_LENGTH safe characters."""
    if not isinstance(value, str) or not 0 < len(value) <= TENANT_ID_MAX_LENGTH:
        return False
    return _TENANT_ID_RE.fullmatch(value) is not None
