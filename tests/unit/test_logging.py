"""Unit tests for logging setup."""

import logging

from stock_management.core.config import get_settings
from stock_management.shared.telemetry import get_logger, setup_logging


def test_get_logger_uses_module_name() -> None:
    logger = get_logger("stock_management.application.services.permission_service")
    assert logger.name == "stock_management.application.services.permission_service"


def test_setup_logging_honours_debug(monkeypatch) -> None:
    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        setup_logging()
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        get_settings.cache_clear()


def test_setup_logging_uses_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    get_settings.cache_clear()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        setup_logging()
        assert root.level == logging.WARNING
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        get_settings.cache_clear()


def test_explicit_level_wins_over_settings(monkeypatch) -> None:
    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("error")
        assert root.level == logging.ERROR
        assert logging.getLogger("redis").level == logging.ERROR
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
        get_settings.cache_clear()
