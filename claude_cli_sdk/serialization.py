"""Conversion of options and messages to plain JSON-ready dicts."""

from dataclasses import asdict
from typing import Any, Dict

from claude_cli_sdk.types import (
    AssistantMessage,
    ClaudeCodeOptions,
    ContentBlock,
    Message,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

_BLOCK_TAGS = {
    TextBlock: "text",
    ToolUseBlock: "tool_use",
    ToolResultBlock: "tool_result",
}

_MESSAGE_TAGS = {
    UserMessage: "user",
    AssistantMessage: "assistant",
    SystemMessage: "system",
    ResultMessage: "result",
}


def options_to_dict(options: ClaudeCodeOptions) -> Dict[str, Any]:
    """Only the fields that differ from their defaults, JSON-ready."""
    return options.model_dump(mode="json", exclude_defaults=True)


def block_to_dict(block: ContentBlock) -> Dict[str, Any]:
    """Serialize a content block with its wire type tag."""
    try:
        tag = _BLOCK_TAGS[type(block)]
    except KeyError:
        raise TypeError(f"Not a content block: {block!r}") from None
    return {"type": tag, **asdict(block)}


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Serialize a message with its wire type tag."""
    try:
        tag = _MESSAGE_TAGS[type(message)]
    except KeyError:
        raise TypeError(f"Not a message: {message!r}") from None

    if isinstance(message, AssistantMessage):
        return {"type": tag, "content": [block_to_dict(b) for b in message.content]}
    return {"type": tag, **asdict(message)}
