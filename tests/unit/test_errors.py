"""
Unit tests for the error hierarchy.
"""

import json

import pytest

from claude_cli_sdk.errors import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    MessageParseError,
    NodeRuntimeNotFoundError,
    ProcessError,
    truncate_preview,
)


@pytest.mark.parametrize(
    "error_cls",
    [
        CLIConnectionError,
        CLINotFoundError,
        NodeRuntimeNotFoundError,
        ProcessError,
        MessageParseError,
    ],
)
def test_all_errors_share_base(error_cls):
    assert issubclass(error_cls, ClaudeSDKError)


def test_not_found_is_a_connection_error():
    assert issubclass(CLINotFoundError, CLIConnectionError)
    assert issubclass(NodeRuntimeNotFoundError, CLINotFoundError)


def test_not_found_includes_path():
    error = CLINotFoundError("CLI not found", cli_path="/nonexistent/path")
    assert error.cli_path == "/nonexistent/path"
    assert "/nonexistent/path" in str(error)


class TestProcessError:
    def test_message_only(self):
        error = ProcessError("Command failed")
        assert error.exit_code is None
        assert error.stderr is None
        assert str(error) == "Command failed"

    def test_exit_code_and_stderr(self):
        error = ProcessError("Command failed", exit_code=1, stderr="permission denied")

        assert error.exit_code == 1
        assert error.stderr == "permission denied"
        assert "exit code: 1" in str(error)
        assert "permission denied" in str(error)


class TestDecodeError:
    def test_keeps_original_error(self):
        line = '{"type": "assistant", "incomplete": '
        try:
            json.loads(line)
        except json.JSONDecodeError as e:
            error = CLIJSONDecodeError(line, e)

        assert error.line == line
        assert isinstance(error.original_error, json.JSONDecodeError)

    def test_truncate_preview(self):
        assert truncate_preview("short", 10) == "short"
        assert truncate_preview("a" * 11, 10) == "a" * 10 + "..."
