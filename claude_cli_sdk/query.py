"""Public query functions."""

from typing import AsyncIterator, Iterator, List, Optional

from claude_cli_sdk.client import AsyncInternalClient, InternalClient
from claude_cli_sdk.types import ClaudeCodeOptions, Message


def query(prompt: str, options: Optional[ClaudeCodeOptions] = None) -> List[Message]:
    """
    Run a prompt through Claude Code and collect every message.

    Blocks until the CLI exits.

    Args:
        prompt: The prompt to send
        options: Per-query configuration; defaults to ClaudeCodeOptions()

    Returns:
        Messages in the order the CLI emitted them

    Example:
        for message in query("What is 2 + 2?"):
            print(message)
    """
    if options is None:
        options = ClaudeCodeOptions()
    return InternalClient().process_query(prompt, options)


def query_stream(
    prompt: str, options: Optional[ClaudeCodeOptions] = None
) -> Iterator[Message]:
    """
    Run a prompt and yield messages as they arrive.

    The iterator is single-pass; issue a new query to start over. Breaking
    out of the loop terminates the CLI process.
    """
    if options is None:
        options = ClaudeCodeOptions()
    return InternalClient().process_query_stream(prompt, options)


async def async_query(
    prompt: str, options: Optional[ClaudeCodeOptions] = None
) -> List[Message]:
    """Asyncio counterpart of query()."""
    if options is None:
        options = ClaudeCodeOptions()
    return await AsyncInternalClient().process_query(prompt, options)


def async_query_stream(
    prompt: str, options: Optional[ClaudeCodeOptions] = None
) -> AsyncIterator[Message]:
    """Asyncio counterpart of query_stream(), for use with ``async for``."""
    if options is None:
        options = ClaudeCodeOptions()
    return AsyncInternalClient().process_query_stream(prompt, options)
