"""
SubprocessCLITransport: owns one Claude Code CLI process for one query.

Lifecycle: UNCONNECTED -> CONNECTED -> DRAINING -> CLOSED.
stderr goes to a temporary file so a chatty CLI cannot block on a full
pipe while stdout is being read line by line.
"""

import logging
import subprocess
import tempfile
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, List, Optional

from claude_cli_sdk.config import get_settings
from claude_cli_sdk.errors import CLIConnectionError, CLINotFoundError, ProcessError
from claude_cli_sdk.transport.command import build_command, build_environment
from claude_cli_sdk.transport.discovery import find_cli
from claude_cli_sdk.types import ClaudeCodeOptions

logger = logging.getLogger(__name__)

# Maximum length of one stdout line (10MB); tool results can be large
MAX_LINE_SIZE = 10 * 1024 * 1024


class TransportState(Enum):
    UNCONNECTED = "unconnected"
    CONNECTED = "connected"
    DRAINING = "draining"
    CLOSED = "closed"


class SubprocessCLITransport:
    """
    Blocking transport over a single CLI subprocess.

    Usage:
        with SubprocessCLITransport(prompt, options) as transport:
            for line in transport.stream():
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
        self._process: Optional[subprocess.Popen] = None
        self._stderr_file: Optional[IO[str]] = None
        self.state = TransportState.UNCONNECTED

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    def _command(self) -> List[str]:
        return build_command(self._prompt, self._options, find_cli(self._cli_path))

    def connect(self) -> None:
        """Locate the CLI and spawn it."""
        if self.state is not TransportState.UNCONNECTED:
            raise CLIConnectionError(f"Cannot connect from state {self.state.value}")

        command = self._command()
        settings = get_settings()
        env = build_environment(settings.cli.entrypoint)
        cwd = str(self._options.cwd) if self._options.cwd is not None else None

        if cwd is not None and not Path(cwd).is_dir():
            raise CLIConnectionError(f"Working directory does not exist: {cwd}")

        logger.debug(f"Spawning CLI: {command[0]} ({len(command) - 1} args), cwd={cwd}")

        self._stderr_file = tempfile.TemporaryFile(
            mode="w+", encoding="utf-8", errors="replace"
        )
        try:
            self._process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=self._stderr_file,
                cwd=cwd,
                env=env,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            self._release()
            raise CLINotFoundError("Claude Code CLI not found at", cli_path=command[0]) from e
        except OSError as e:
            self._release()
            raise CLIConnectionError(f"Failed to start Claude Code CLI: {e}") from e

        self.state = TransportState.CONNECTED

    def stream(self) -> Iterator[str]:
        """
        Yield raw stdout lines as the CLI emits them.

        Raises:
            CLIConnectionError: Not connected, or a line exceeds MAX_LINE_SIZE
            ProcessError: The CLI exited non-zero once output was exhausted
        """
        if self.state is not TransportState.CONNECTED or self._process is None:
            raise CLIConnectionError("Not connected to CLI")

        assert self._process.stdout is not None
        for line in self._process.stdout:
            # Character count is a lower bound on the UTF-8 byte count
            if len(line) > MAX_LINE_SIZE:
                raise CLIConnectionError(
                    f"CLI output line exceeds the {MAX_LINE_SIZE}-byte limit"
                )
            yield line

        self.state = TransportState.DRAINING
        return_code = self._process.wait()

        if return_code != 0:
            stderr = self._read_stderr()
            logger.warning(f"CLI exited with code {return_code}")
            raise ProcessError(
                "Command failed", exit_code=return_code, stderr=stderr or None
            )

    def _read_stderr(self) -> str:
        if self._stderr_file is None:
            return ""
        self._stderr_file.seek(0)
        return self._stderr_file.read().strip()

    def close(self) -> None:
        """Terminate the process if still running and release resources."""
        if self.state is TransportState.CLOSED:
            return

        if self._process is not None and self._process.poll() is None:
            timeout = get_settings().cli.terminate_timeout
            logger.debug(f"Terminating CLI process {self._process.pid}")
            self._process.terminate()
            try:
                self._process.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                logger.warning(
                    f"CLI process {self._process.pid} ignored terminate, killing"
                )
                self._process.kill()
                self._process.wait()

        self._release()
        self.state = TransportState.CLOSED

    def _release(self) -> None:
        if self._process is not None and self._process.stdout is not None:
            self._process.stdout.close()
        if self._stderr_file is not None:
            self._stderr_file.close()
            self._stderr_file = None

    def __enter__(self) -> "SubprocessCLITransport":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
