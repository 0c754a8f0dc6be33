"""Telemetry: logging setup."""

from stock_management.shared.telemetry.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
