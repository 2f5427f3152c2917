"""
Local execution of the CLI's basic tools.

Lets a caller replay Read, Write and Bash tool invocations found in
ToolUseBlocks on the local machine. Failures are reported in the returned
ToolResult rather than raised.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from claude_cli_sdk.types import ToolUseBlock

logger = logging.getLogger(__name__)

# Seconds a replayed Bash command may run
BASH_TIMEOUT = 120


@dataclass(frozen=True)
class ReadTool:
    path: str


@dataclass(frozen=True)
class WriteTool:
    path: str
    content: str


@dataclass(frozen=True)
class BashTool:
    command: str


Tool = Union[ReadTool, WriteTool, BashTool]


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a locally executed tool."""

    success: bool
    output: Optional[str] = None
    error: Optional[str] = None


def create_tool_from_block(block: ToolUseBlock) -> Optional[Tool]:
    """Build a tool from a ToolUseBlock, or None if the tool is not supported."""
    if block.name == "Read":
        return ReadTool(path=block.input.get("file_path", ""))
    if block.name == "Write":
        return WriteTool(
            path=block.input.get("file_path", ""),
            content=block.input.get("content", ""),
        )
    if block.name == "Bash":
        return BashTool(command=block.input.get("command", ""))
    return None


def execute_tool(tool: Tool) -> ToolResult:
    """Run a tool locally."""
    if isinstance(tool, ReadTool):
        return _execute_read(tool)
    if isinstance(tool, WriteTool):
        return _execute_write(tool)
    if isinstance(tool, BashTool):
        return _execute_bash(tool)
    return ToolResult(success=False, error="Unknown tool type")


def _execute_read(tool: ReadTool) -> ToolResult:
    path = Path(tool.path)
    if not path.is_file():
        return ToolResult(success=False, error=f"File not found: {tool.path}")
    try:
        return ToolResult(success=True, output=path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return ToolResult(success=False, error=str(e))


def _execute_write(tool: WriteTool) -> ToolResult:
    path = Path(tool.path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tool.content, encoding="utf-8")
    except OSError as e:
        return ToolResult(success=False, error=str(e))
    return ToolResult(success=True, output="File written successfully")


def _execute_bash(tool: BashTool) -> ToolResult:
    try:
        argv = shlex.split(tool.command)
    except ValueError as e:
        return ToolResult(success=False, error=f"Invalid command: {e}")
    if not argv:
        return ToolResult(success=False, error="Empty command")

    logger.debug(f"Running tool command: {argv[0]}")
    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=BASH_TIMEOUT,
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        return ToolResult(success=False, error=f"Command not found: {argv[0]}")
    except subprocess.TimeoutExpired:
        return ToolResult(
            success=False, error=f"Command timed out after {BASH_TIMEOUT}s"
        )
    except OSError as e:
        return ToolResult(success=False, error=str(e))

    if completed.returncode != 0:
        return ToolResult(
            success=False,
            output=completed.stdout or None,
            error=f"Process failed with exit code: {completed.returncode}",
        )
    return ToolResult(success=True, output=completed.stdout)
