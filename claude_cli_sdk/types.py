"""Type definitions for the Claude CLI SDK.

ClaudeCodeOptions is a frozen pydantic model holding the per-query knobs.
Messages and content blocks are frozen dataclasses created only by the
message parser; they keep values exactly as the CLI emitted them.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class PermissionMode(str, Enum):
    """Permission modes understood by the CLI's --permission-mode flag."""

    DEFAULT = "default"
    ACCEPT_EDITS = "acceptEdits"
    BYPASS_PERMISSIONS = "bypassPermissions"


class McpServerConfig(BaseModel):
    """An MCP server the CLI may launch, described by its command vector."""

    model_config = ConfigDict(frozen=True)

    transport: Tuple[str, ...] = Field(..., description="Command and arguments")
    env: Optional[Dict[str, Any]] = Field(
        None, description="Environment overrides for the server process"
    )


class ClaudeCodeOptions(BaseModel):
    """Configuration for a single query.

    Only types are validated; values the CLI would reject (for example a
    negative max_turns) are passed through and fail there.
    """

    model_config = ConfigDict(frozen=True)

    allowed_tools: Tuple[str, ...] = ()
    max_thinking_tokens: int = 8000
    system_prompt: Optional[str] = None
    append_system_prompt: Optional[str] = None
    mcp_tools: Tuple[str, ...] = ()
    mcp_servers: Dict[str, McpServerConfig] = Field(default_factory=dict)
    permission_mode: Optional[PermissionMode] = None
    continue_conversation: bool = False
    resume: Optional[str] = None
    max_turns: Optional[int] = None
    disallowed_tools: Tuple[str, ...] = ()
    model: Optional[str] = None
    permission_prompt_tool_name: Optional[str] = None
    cwd: Optional[Union[str, Path]] = None


# Content blocks


@dataclass(frozen=True)
class TextBlock:
    """Plain text emitted by the assistant."""

    text: str


@dataclass(frozen=True)
class ToolUseBlock:
    """A tool invocation requested by the assistant."""

    id: str
    name: str
    input: Dict[str, Any]


@dataclass(frozen=True)
class ToolResultBlock:
    """The result of a tool invocation, referencing ToolUseBlock.id."""

    tool_use_id: str
    content: Optional[Union[str, List[Dict[str, Any]]]] = None
    is_error: Optional[bool] = None


ContentBlock = Union[TextBlock, ToolUseBlock, ToolResultBlock]


# Messages


@dataclass(frozen=True)
class UserMessage:
    """A user turn, with its content flattened to a string."""

    content: str


@dataclass(frozen=True)
class AssistantMessage:
    """One assistant turn; blocks keep their emitted order."""

    content: List[ContentBlock] = field(default_factory=list)


@dataclass(frozen=True)
class SystemMessage:
    """System event; data holds the full decoded object."""

    subtype: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class ResultMessage:
    """Final message of a query with cost and timing information."""

    subtype: str
    cost_usd: float
    duration_ms: int
    duration_api_ms: int
    is_error: bool
    num_turns: int
    session_id: str
    total_cost_usd: float
    usage: Optional[Dict[str, Any]] = None
    result: Optional[str] = None


Message = Union[UserMessage, AssistantMessage, SystemMessage, ResultMessage]
