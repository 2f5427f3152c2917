"""Logging setup for applications built on the SDK.

The library itself only attaches a NullHandler; setup_logging() is for
entry points (such as the bundled command line) that want output on stderr.
"""

import logging
import sys
from typing import Optional

from ..config import get_settings

PACKAGE_LOGGER = "claude_cli_sdk"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Route SDK logs to stderr.

    Args:
        level: Log level name; defaults to settings.logging.level

    Returns:
        The configured package logger
    """
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel((level or get_settings().logging.level).upper())
    app_logger.propagate = False

    if app_logger.hasHandlers():
        app_logger.handlers.clear()

    # stdout stays reserved for message output
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(stderr_handler)

    app_logger.debug(f"Logging initialized at level {logging.getLevelName(app_logger.level)}")
    return app_logger
