"""Error hierarchy for the Claude CLI SDK.

Every error raised by this package derives from ClaudeSDKError so callers
can separate SDK failures from unrelated exceptions.
"""

from typing import Any, Dict, Optional

# Number of characters of an undecodable line kept in error messages
DEFAULT_PREVIEW_LENGTH = 100
TRUNCATION_MARKER = "..."


class ClaudeSDKError(Exception):
    """Base exception for all Claude CLI SDK errors."""


class CLIConnectionError(ClaudeSDKError):
    """Raised when the CLI process cannot be started or is not connected."""


class CLINotFoundError(CLIConnectionError):
    """Raised when the Claude Code CLI binary cannot be located."""

    def __init__(
        self,
        message: str = "Claude Code CLI not found",
        cli_path: Optional[str] = None,
    ):
        if cli_path:
            message = f"{message}: {cli_path}"
        super().__init__(message)
        self.cli_path = cli_path


class NodeRuntimeNotFoundError(CLINotFoundError):
    """Raised when the CLI is missing because no Node.js runtime is installed."""


class ProcessError(ClaudeSDKError):
    """Raised when the CLI process exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        self.exit_code = exit_code
        self.stderr = stderr

        if exit_code is not None:
            message = f"{message} (exit code: {exit_code})"
        if stderr:
            message = f"{message}\nError output: {stderr}"

        super().__init__(message)


def truncate_preview(line: str, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Shorten a line for display, appending a marker when cut."""
    if len(line) <= preview_length:
        return line
    return line[:preview_length] + TRUNCATION_MARKER


class CLIJSONDecodeError(ClaudeSDKError):
    """Raised when a line of CLI output is not a JSON object.

    The message never exceeds preview_length characters once the line does,
    so it is always shorter than a truncated line. The full parser
    diagnostic, including its position, stays on original_error.
    """

    def __init__(
        self,
        line: str,
        original_error: Exception,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ):
        self.line = line
        self.preview = truncate_preview(line, preview_length)
        self.original_error = original_error

        if len(line) <= preview_length:
            # json.JSONDecodeError.msg is the reason without the position text
            reason = getattr(original_error, "msg", None) or str(original_error)
            message = f"Failed to decode JSON: {line}: {reason}"
        else:
            budget = max(preview_length - len(TRUNCATION_MARKER), 0)
            message = truncate_preview(f"Failed to decode JSON: {line}", budget)

        super().__init__(message)


class MessageParseError(ClaudeSDKError):
    """Raised when a decoded object lacks a field its message type requires."""

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.data = data
