"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure and permission code limits.
"""

# Cache key prefix for resolved role permissions (:tenant_id:role_rank)
CACHE_PREFIX_ROLE_PERMISSIONS = "role_permissions"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Permission codes: uppercase letters, digits, underscore.
PERMISSION_CODE_MAX_LENGTH = 50

# Length of generated permission and grant ids (CUID2 default).
ID_LENGTH = 24
