"""Logging setup for authorization and cache diagnostics.

Services log through module loggers from get_logger(); denials go out at
INFO and cache traffic at DEBUG.
"""

import logging
import sys

from stock_management.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging to stdout.

    Args:
        level: Optional level name overriding settings. Without it the level
            is DEBUG when settings.debug is set, else settings.log_level.
    """
    settings = get_settings()
    if level is not None:
        log_level = getattr(logging, level.upper())
    elif settings.debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, settings.log_level.upper())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # redis-py connection chatter stays out of DEBUG output
    logging.getLogger("redis").setLevel(max(log_level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)
