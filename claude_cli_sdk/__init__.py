"""
Claude CLI SDK.

Python binding for the Claude Code command line program: spawns the CLI,
sends a prompt and decodes its stream-json output into typed messages.

Example:
    from claude_cli_sdk import query, ClaudeCodeOptions, AssistantMessage

    for message in query("What is 2 + 2?", ClaudeCodeOptions(max_turns=1)):
        if isinstance(message, AssistantMessage):
            print(message.content)
"""

import logging

from claude_cli_sdk.errors import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    MessageParseError,
    NodeRuntimeNotFoundError,
    ProcessError,
)
from claude_cli_sdk.query import async_query, async_query_stream, query, query_stream
from claude_cli_sdk.tools import (
    BashTool,
    ReadTool,
    Tool,
    ToolResult,
    WriteTool,
    create_tool_from_block,
    execute_tool,
)
from claude_cli_sdk.types import (
    AssistantMessage,
    ClaudeCodeOptions,
    ContentBlock,
    McpServerConfig,
    Message,
    PermissionMode,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Queries
    "query",
    "query_stream",
    "async_query",
    "async_query_stream",
    # Options
    "ClaudeCodeOptions",
    "McpServerConfig",
    "PermissionMode",
    # Messages
    "Message",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ResultMessage",
    # Content blocks
    "ContentBlock",
    "TextBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    # Errors
    "ClaudeSDKError",
    "CLIConnectionError",
    "CLINotFoundError",
    "NodeRuntimeNotFoundError",
    "ProcessError",
    "CLIJSONDecodeError",
    "MessageParseError",
    # Local tools
    "Tool",
    "ReadTool",
    "WriteTool",
    "BashTool",
    "ToolResult",
    "create_tool_from_block",
    "execute_tool",
]
