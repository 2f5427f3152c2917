"""Logging helpers for the Claude CLI SDK."""

from .setup import setup_logging

__all__ = ["setup_logging"]
