"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


# Tenant initialization service interface
class ITenantInitializationService(Protocol):
    """Protocol for seeding a new tenant's permissions and role grants."""

    async def initialize_role_permissions(self, tenant_id: str) -> int:
        """Create system-defined permissions and default grants; return grants created."""


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for permission caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""
