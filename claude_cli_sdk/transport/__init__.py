"""
Transport package.

Locates the Claude Code CLI, builds its command line and streams its output
from one subprocess per query.
"""

from claude_cli_sdk.transport.async_subprocess_cli import AsyncSubprocessCLITransport
from claude_cli_sdk.transport.command import (
    ENTRYPOINT_ENV_VAR,
    build_command,
    build_environment,
)
from claude_cli_sdk.transport.discovery import CLAUDE_CLI, CLIInfo, find_cli
from claude_cli_sdk.transport.subprocess_cli import (
    SubprocessCLITransport,
    TransportState,
)

__all__ = [
    "AsyncSubprocessCLITransport",
    "CLAUDE_CLI",
    "CLIInfo",
    "ENTRYPOINT_ENV_VAR",
    "SubprocessCLITransport",
    "TransportState",
    "build_command",
    "build_environment",
    "find_cli",
]
