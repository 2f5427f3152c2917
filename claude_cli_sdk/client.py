"""
Internal clients wiring transport, decoder and parser together.

Each query gets its own transport instance; no state is shared between
queries. The transport is closed exactly once, whether the output is fully
consumed, an error is raised, or the caller stops iterating early.
"""

import logging
from typing import AsyncIterator, Callable, Iterator, List

from claude_cli_sdk.decoder import decode_line, decode_lines
from claude_cli_sdk.parser import parse_message
from claude_cli_sdk.transport import AsyncSubprocessCLITransport, SubprocessCLITransport
from claude_cli_sdk.types import ClaudeCodeOptions, Message

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str, ClaudeCodeOptions], SubprocessCLITransport]
AsyncTransportFactory = Callable[[str, ClaudeCodeOptions], AsyncSubprocessCLITransport]


class InternalClient:
    """Blocking query pipeline."""

    def __init__(self, transport_factory: TransportFactory = SubprocessCLITransport):
        self._transport_factory = transport_factory

    def process_query_stream(
        self, prompt: str, options: ClaudeCodeOptions
    ) -> Iterator[Message]:
        """Yield messages one at a time as the CLI emits them."""
        transport = self._transport_factory(prompt, options)
        try:
            transport.connect()
            for data in decode_lines(transport.stream()):
                message = parse_message(data)
                if message is not None:
                    yield message
        finally:
            transport.close()

    def process_query(self, prompt: str, options: ClaudeCodeOptions) -> List[Message]:
        """Run the query to completion and return every message in order."""
        messages = list(self.process_query_stream(prompt, options))
        logger.debug(f"Query finished with {len(messages)} messages")
        return messages


class AsyncInternalClient:
    """Asyncio query pipeline."""

    def __init__(
        self,
        transport_factory: AsyncTransportFactory = AsyncSubprocessCLITransport,
    ):
        self._transport_factory = transport_factory

    async def process_query_stream(
        self, prompt: str, options: ClaudeCodeOptions
    ) -> AsyncIterator[Message]:
        """Yield messages one at a time as the CLI emits them."""
        transport = self._transport_factory(prompt, options)
        try:
            await transport.connect()
            async for line in transport.stream():
                data = decode_line(line)
                if data is None:
                    continue
                message = parse_message(data)
                if message is not None:
                    yield message
        finally:
            await transport.close()

    async def process_query(
        self, prompt: str, options: ClaudeCodeOptions
    ) -> List[Message]:
        """Run the query to completion and return every message in order."""
        messages = [
            message async for message in self.process_query_stream(prompt, options)
        ]
        logger.debug(f"Query finished with {len(messages)} messages")
        return messages
