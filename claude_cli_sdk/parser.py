"""
Message parser: decoded CLI objects to typed messages.

The CLI emits four message types (user, assistant, system, result).
Unknown message and content-block types are dropped rather than failing the
query; each unknown type is logged once so protocol drift stays visible.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from claude_cli_sdk.errors import MessageParseError
from claude_cli_sdk.types import (
    AssistantMessage,
    ContentBlock,
    Message,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

logger = logging.getLogger(__name__)

_reported_unknown_types: Set[str] = set()


def _report_unknown(kind: str, type_name: Any) -> None:
    key = f"{kind}:{type_name}"
    if key in _reported_unknown_types:
        return
    _reported_unknown_types.add(key)
    logger.warning(f"Dropping {kind} with unrecognized type {type_name!r}")


def _user_content(content: Any) -> str:
    """Flatten user message content into a single string."""
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        for fragment in content:
            if isinstance(fragment, dict) and isinstance(fragment.get("text"), str):
                return fragment["text"]

        texts = [
            str(fragment["text"])
            for fragment in content
            if isinstance(fragment, dict) and fragment.get("text") is not None
        ]
        if texts:
            return " ".join(texts)

        return json.dumps(content)

    return str(content)


def parse_content_block(block: Dict[str, Any]) -> Optional[ContentBlock]:
    """Map one assistant content element, or None for unknown types."""
    block_type = block.get("type")

    if block_type == "text":
        return TextBlock(text=block["text"])
    if block_type == "tool_use":
        return ToolUseBlock(id=block["id"], name=block["name"], input=block["input"])
    if block_type == "tool_result":
        return ToolResultBlock(
            tool_use_id=block["tool_use_id"],
            content=block.get("content"),
            is_error=block.get("is_error"),
        )

    _report_unknown("content block", block_type)
    return None


def _parse_assistant(data: Dict[str, Any]) -> AssistantMessage:
    blocks: List[ContentBlock] = []
    for element in data["message"]["content"]:
        block = parse_content_block(element)
        if block is not None:
            blocks.append(block)
    return AssistantMessage(content=blocks)


def _parse_result(data: Dict[str, Any]) -> ResultMessage:
    # cost_usd falls back to the cumulative total when the CLI omits it
    cost_usd = data["cost_usd"] if "cost_usd" in data else data["total_cost_usd"]
    return ResultMessage(
        subtype=data["subtype"],
        cost_usd=cost_usd,
        duration_ms=data["duration_ms"],
        duration_api_ms=data["duration_api_ms"],
        is_error=data["is_error"],
        num_turns=data["num_turns"],
        session_id=data["session_id"],
        total_cost_usd=data["total_cost_usd"],
        usage=data.get("usage"),
        result=data.get("result"),
    )


def parse_message(data: Dict[str, Any]) -> Optional[Message]:
    """
    Convert a decoded CLI object into a Message.

    Args:
        data: One decoded line of CLI output

    Returns:
        The typed message, or None when the type is unknown or missing

    Raises:
        MessageParseError: A recognized type is missing a required field
    """
    message_type = data.get("type")

    try:
        if message_type == "user":
            return UserMessage(content=_user_content(data["message"]["content"]))
        if message_type == "assistant":
            return _parse_assistant(data)
        if message_type == "system":
            return SystemMessage(subtype=data["subtype"], data=data)
        if message_type == "result":
            return _parse_result(data)
    except KeyError as e:
        raise MessageParseError(
            f"Missing required field {e} in {message_type} message", data
        ) from e
    except (TypeError, AttributeError) as e:
        raise MessageParseError(
            f"Malformed {message_type} message: {e}", data
        ) from e

    _report_unknown("message", message_type)
    return None
