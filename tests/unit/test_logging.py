"""
Unit tests for logging setup.
"""

import logging
import sys

from claude_cli_sdk.logging import setup_logging


def test_configures_package_logger():
    logger = setup_logging("debug")

    assert logger.name == "claude_cli_sdk"
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_repeated_setup_does_not_stack_handlers():
    setup_logging("INFO")
    logger = setup_logging("WARNING")

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_level_from_settings(monkeypatch):
    monkeypatch.setenv("CLAUDE_SDK_LOG_LEVEL", "error")

    logger = setup_logging()

    assert logger.level == logging.ERROR


def test_library_logger_has_null_handler():
    import claude_cli_sdk  # noqa: F401

    # Restored by the autouse fixture, so only the import-time handler remains
    handlers = logging.getLogger("claude_cli_sdk").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
