"""
CLI discovery: locate the Claude Code binary.

Search order is an explicit override, then PATH, then common install
directories. Failures say whether Node.js itself is missing, since that
needs different remediation than installing the CLI package.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from claude_cli_sdk.config import get_settings
from claude_cli_sdk.errors import CLINotFoundError, NodeRuntimeNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class CLIInfo:
    """Information about a CLI tool."""

    name: str
    executable: str
    install_command: str
    documentation_url: str


CLAUDE_CLI = CLIInfo(
    name="Claude Code",
    executable="claude",
    install_command="npm install -g @anthropic-ai/claude-code",
    documentation_url="https://docs.anthropic.com/claude-code",
)

NODE_RUNTIME = CLIInfo(
    name="Node.js",
    executable="node",
    install_command="see https://nodejs.org/en/download",
    documentation_url="https://nodejs.org/",
)


def get_install_instructions(cli_info: CLIInfo = CLAUDE_CLI) -> str:
    """Installation instructions for a missing tool."""
    return (
        f"{cli_info.name} is not installed or not in PATH.\n"
        f"Install with: {cli_info.install_command}\n"
        f"Documentation: {cli_info.documentation_url}"
    )


def _is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_cli(
    cli_path: Optional[str] = None,
    search_paths: Optional[Iterable[str]] = None,
) -> str:
    """
    Resolve the Claude Code CLI binary.

    Args:
        cli_path: Explicit override; falls back to settings.cli.path
        search_paths: Directories tried after PATH; defaults to
                      settings.cli.search_paths

    Returns:
        Path to the CLI executable

    Raises:
        CLINotFoundError: The override does not exist, or nothing was found
        NodeRuntimeNotFoundError: Nothing was found and Node.js is missing
    """
    settings = get_settings()
    override = cli_path or settings.cli.path

    if override:
        candidate = Path(override).expanduser()
        if candidate.exists():
            logger.debug(f"Using CLI override: {candidate}")
            return str(candidate)
        raise CLINotFoundError("Claude Code CLI not found at", cli_path=str(candidate))

    found = shutil.which(CLAUDE_CLI.executable)
    if found:
        logger.debug(f"Found CLI on PATH: {found}")
        return found

    if search_paths is None:
        search_paths = settings.cli.search_paths

    for directory in search_paths:
        candidate = Path(directory).expanduser() / CLAUDE_CLI.executable
        if _is_executable_file(candidate):
            logger.debug(f"Found CLI in fallback location: {candidate}")
            return str(candidate)

    if shutil.which(NODE_RUNTIME.executable) is None:
        logger.warning("Claude Code CLI not found and Node.js is not installed")
        raise NodeRuntimeNotFoundError(
            "Claude Code requires Node.js, which is not installed.\n\n"
            f"{get_install_instructions(NODE_RUNTIME)}\n\n"
            f"Then install the CLI with: {CLAUDE_CLI.install_command}"
        )

    logger.warning("Claude Code CLI not found")
    raise CLINotFoundError(get_install_instructions(CLAUDE_CLI))
