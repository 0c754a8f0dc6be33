"""Infrastructure adapters (Redis cache)."""
