"""
Shared test fixtures for the Claude CLI SDK tests.

Settings are cached process-wide, so every test starts from a clean
environment and an empty settings cache.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from claude_cli_sdk import parser as parser_module
from claude_cli_sdk.config import get_settings

SETTINGS_ENV_VARS = ("CLAUDE_CLI_PATH", "CLAUDE_SDK_LOG_LEVEL", "CLAUDE_SDK_CONFIG_FILE")

# Output of a typical one-turn session
SAMPLE_SESSION_LINES = [
    '{"type":"system","subtype":"init","session_id":"s1"}',
    '{"type":"assistant","message":{"content":[{"type":"text","text":"4"}]}}',
    '{"type":"result","subtype":"success","cost_usd":0.001,"duration_ms":500,'
    '"duration_api_ms":400,"is_error":false,"num_turns":1,"session_id":"s1",'
    '"total_cost_usd":0.001}',
]


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    """Strip SDK environment variables and reset cached state around each test."""
    for name in list(os.environ):
        if name.startswith("CLAUDE_SDK_") or name in SETTINGS_ENV_VARS:
            monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    parser_module._reported_unknown_types.clear()
    yield
    get_settings.cache_clear()
    parser_module._reported_unknown_types.clear()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """setup_logging() reconfigures the package logger; undo it after each test."""
    package_logger = logging.getLogger("claude_cli_sdk")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@dataclass
class FakeCLI:
    """A shell script standing in for the claude binary."""

    path: Path
    workdir: Path

    @property
    def recorded_args(self) -> List[str]:
        return (self.workdir / "args.txt").read_text().splitlines()

    @property
    def recorded_entrypoint(self) -> str:
        return (self.workdir / "entrypoint.txt").read_text().strip()

    @property
    def recorded_cwd(self) -> str:
        return (self.workdir / "cwd.txt").read_text().strip()


@pytest.fixture
def make_fake_cli(tmp_path):
    """
    Factory writing an executable fake CLI.

    The script records its arguments, CLAUDE_CODE_ENTRYPOINT and working
    directory, prints the given stdout lines, writes stderr, then either
    exits with exit_code or sleeps (to simulate a hung process).
    """

    def _make(
        lines: Optional[List[str]] = None,
        exit_code: int = 0,
        stderr: str = "",
        hang: bool = False,
        name: str = "claude",
    ) -> FakeCLI:
        workdir = tmp_path / f"fake-{name}"
        workdir.mkdir(exist_ok=True)

        output_file = workdir / "stdout.txt"
        output_file.write_text("".join(f"{line}\n" for line in (lines or [])))
        stderr_file = workdir / "stderr.txt"
        stderr_file.write_text(stderr)

        script = workdir / name
        script.write_text(
            "#!/bin/sh\n"
            f'for a in "$@"; do printf "%s\\n" "$a"; done > "{workdir}/args.txt"\n'
            f'printf "%s\\n" "$CLAUDE_CODE_ENTRYPOINT" > "{workdir}/entrypoint.txt"\n'
            f'pwd > "{workdir}/cwd.txt"\n'
            f'cat "{output_file}"\n'
            f'cat "{stderr_file}" >&2\n'
            + ("exec sleep 30\n" if hang else f"exit {exit_code}\n")
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeCLI(path=script, workdir=workdir)

    return _make


@pytest.fixture
def sample_lines() -> List[str]:
    return list(SAMPLE_SESSION_LINES)


class ScriptedTransport:
    """In-memory transport replaying fixed lines; counts lifecycle calls."""

    def __init__(self, lines: List[str], error: Optional[Exception] = None):
        self.lines = lines
        self.error = error
        self.connect_calls = 0
        self.close_calls = 0
        self.lines_served = 0

    def connect(self) -> None:
        self.connect_calls += 1

    def stream(self):
        for line in self.lines:
            self.lines_served += 1
            yield line
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.close_calls += 1


class AsyncScriptedTransport(ScriptedTransport):
    """Asyncio flavour of ScriptedTransport."""

    async def connect(self) -> None:
        self.connect_calls += 1

    async def stream(self):
        for line in self.lines:
            self.lines_served += 1
            yield line
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def scripted_transport_factory():
    """
    Build (factory, created) where factory(prompt, options) returns a
    ScriptedTransport over the given lines and created collects instances.
    """

    def _build(lines: List[str], error: Optional[Exception] = None, asynchronous=False):
        created: List[ScriptedTransport] = []
        calls: List[Dict] = []
        cls = AsyncScriptedTransport if asynchronous else ScriptedTransport

        def factory(prompt, options):
            calls.append({"prompt": prompt, "options": options})
            transport = cls(lines, error)
            created.append(transport)
            return transport

        factory.created = created
        factory.calls = calls
        return factory

    return _build
