"""
Unit Tests: asyncio query pipeline over an in-memory transport.
"""

import pytest

from claude_cli_sdk.client import AsyncInternalClient
from claude_cli_sdk.errors import CLIJSONDecodeError, ProcessError
from claude_cli_sdk.types import (
    AssistantMessage,
    ClaudeCodeOptions,
    ResultMessage,
    SystemMessage,
)


@pytest.mark.asyncio
async def test_typical_session(scripted_transport_factory, sample_lines):
    factory = scripted_transport_factory(sample_lines, asynchronous=True)
    client = AsyncInternalClient(transport_factory=factory)

    messages = await client.process_query("What is 2 + 2?", ClaudeCodeOptions())

    assert [type(m) for m in messages] == [
        SystemMessage,
        AssistantMessage,
        ResultMessage,
    ]
    assert factory.created[0].connect_calls == 1
    assert factory.created[0].close_calls == 1


@pytest.mark.asyncio
async def test_stream_matches_batch(scripted_transport_factory, sample_lines):
    factory = scripted_transport_factory(sample_lines, asynchronous=True)
    client = AsyncInternalClient(transport_factory=factory)

    streamed = [m async for m in client.process_query_stream("x", ClaudeCodeOptions())]
    batched = await client.process_query("x", ClaudeCodeOptions())

    assert streamed == batched


@pytest.mark.asyncio
async def test_skips_blank_lines(scripted_transport_factory, sample_lines):
    lines = ["", sample_lines[0], "   ", sample_lines[1]]
    factory = scripted_transport_factory(lines, asynchronous=True)

    messages = await AsyncInternalClient(transport_factory=factory).process_query(
        "x", ClaudeCodeOptions()
    )

    assert len(messages) == 2


@pytest.mark.asyncio
async def test_early_stop_closes_transport(scripted_transport_factory, sample_lines):
    factory = scripted_transport_factory(sample_lines, asynchronous=True)
    stream = AsyncInternalClient(transport_factory=factory).process_query_stream(
        "x", ClaudeCodeOptions()
    )

    first = await stream.__anext__()
    await stream.aclose()

    assert isinstance(first, SystemMessage)
    assert factory.created[0].close_calls == 1
    assert factory.created[0].lines_served == 1


@pytest.mark.asyncio
async def test_process_error_after_messages(scripted_transport_factory, sample_lines):
    error = ProcessError("Command failed", exit_code=2, stderr="bad flag")
    factory = scripted_transport_factory(sample_lines, error=error, asynchronous=True)
    received = []

    with pytest.raises(ProcessError):
        async for message in AsyncInternalClient(
            transport_factory=factory
        ).process_query_stream("x", ClaudeCodeOptions()):
            received.append(message)

    assert len(received) == 3
    assert factory.created[0].close_calls == 1


@pytest.mark.asyncio
async def test_decode_error_closes_transport(scripted_transport_factory):
    factory = scripted_transport_factory(["not json"], asynchronous=True)

    with pytest.raises(CLIJSONDecodeError):
        await AsyncInternalClient(transport_factory=factory).process_query(
            "x", ClaudeCodeOptions()
        )

    assert factory.created[0].close_calls == 1
