"""Core: configuration, constants, tenant id validation."""
