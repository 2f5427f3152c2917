"""
AsyncSubprocessCLITransport: asyncio flavour of SubprocessCLITransport.

Same state machine and error contract; each stdout line is one suspend point.
stderr is drained by a task so the CLI never blocks on a full pipe.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, List, Optional

from claude_cli_sdk.config import get_settings
from claude_cli_sdk.errors import CLIConnectionError, CLINotFoundError, ProcessError
from claude_cli_sdk.transport.command import build_command, build_environment
from claude_cli_sdk.transport.discovery import find_cli
from claude_cli_sdk.transport.subprocess_cli import MAX_LINE_SIZE, TransportState
from claude_cli_sdk.types import ClaudeCodeOptions

logger = logging.getLogger(__name__)



class AsyncSubprocessCLITransport:
    """
    Asyncio transport over a single CLI subprocess.

    Usage:
        async with AsyncSubprocessCLITransport(prompt, options) as transport:
            async for line in transport.stream():
                ...
    """

    def __init__(
        self,
        prompt: str,
        options: ClaudeCodeOptions,
        cli_path: Optional[str] = None,
    ):
        self._prompt = prompt
        self._options = options
        self._cli_path = cli_path
        self._process: Optional[asyncio.subprocess.Process] = None
        self._stderr_task: Optional[asyncio.Task] = None
        self.state = TransportState.UNCONNECTED

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    def _command(self) -> List[str]:
        return build_command(self._prompt, self._options, find_cli(self._cli_path))

    async def connect(self) -> None:
        """Locate the CLI and spawn it."""
        if self.state is not TransportState.UNCONNECTED:
            raise CLIConnectionError(f"Cannot connect from state {self.state.value}")

        command = self._command()
        env = build_environment(get_settings().cli.entrypoint)
        cwd = str(self._options.cwd) if self._options.cwd is not None else None

        if cwd is not None and not Path(cwd).is_dir():
            raise CLIConnectionError(f"Working directory does not exist: {cwd}")

        logger.debug(f"Spawning CLI: {command[0]} ({len(command) - 1} args), cwd={cwd}")

        try:
            self._process = await asyncio.create_subprocess_exec(
                *command,
                env=env,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=MAX_LINE_SIZE,
            )
        except FileNotFoundError as e:
            raise CLINotFoundError("Claude Code CLI not found at", cli_path=command[0]) from e
        except OSError as e:
            raise CLIConnectionError(f"Failed to start Claude Code CLI: {e}") from e

        self._stderr_task = asyncio.create_task(self._drain_stderr())
        self.state = TransportState.CONNECTED

    async def _drain_stderr(self) -> str:
        assert self._process is not None and self._process.stderr is not None
        data = await self._process.stderr.read()
        return data.decode("utf-8", errors="replace").strip()

    async def stream(self) -> AsyncIterator[str]:
        """
        Yield raw stdout lines as the CLI emits them.

        Raises:
            CLIConnectionError: Not connected, or a line exceeds MAX_LINE_SIZE
            ProcessError: The CLI exited non-zero once output was exhausted
        """
        if self.state is not TransportState.CONNECTED or self._process is None:
            raise CLIConnectionError("Not connected to CLI")

        assert self._process.stdout is not None
        while True:
            try:
                raw = await self._process.stdout.readline()
            except (ValueError, asyncio.LimitOverrunError) as e:
                raise CLIConnectionError(
                    f"CLI output line exceeds the {MAX_LINE_SIZE}-byte limit"
                ) from e
            if not raw:
                break
            yield raw.decode("utf-8", errors="replace")

        self.state = TransportState.DRAINING
        return_code = await self._process.wait()

        if return_code != 0:
            stderr = await self._stderr_task if self._stderr_task else ""
            logger.warning(f"CLI exited with code {return_code}")
            raise ProcessError(
                "Command failed", exit_code=return_code, stderr=stderr or None
            )

    async def close(self) -> None:
        """Terminate the process if still running and release resources."""
        if self.state is TransportState.CLOSED:
            return

        if self._process is not None and self._process.returncode is None:
            timeout = get_settings().cli.terminate_timeout
            logger.debug(f"Terminating CLI process {self._process.pid}")
            try:
                self._process.terminate()
                await asyncio.wait_for(self._process.wait(), timeout=timeout)
            except ProcessLookupError:
                pass  # Exited between the check and terminate()
            except asyncio.TimeoutError:
                logger.warning(
                    f"CLI process {self._process.pid} ignored terminate, killing"
                )
                self._process.kill()
                await self._process.wait()

        if self._stderr_task is not None:
            if not self._stderr_task.done():
                self._stderr_task.cancel()
            try:
                await self._stderr_task
            except asyncio.CancelledError:
                pass
            self._stderr_task = None

        self.state = TransportState.CLOSED

    async def __aenter__(self) -> "AsyncSubprocessCLITransport":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
