"""Shared utilities (ID generation)."""

from stock_management.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid"]
