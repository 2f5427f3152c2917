"""
Command building for the Claude Code CLI.

Maps a prompt and ClaudeCodeOptions to an argument vector and builds the
child process environment. Both functions are pure: the same inputs always
produce the same outputs, and the host environment is never modified.
"""

import json
import os
from typing import Dict, List, Mapping, Optional

from claude_cli_sdk.types import ClaudeCodeOptions

# Environment variable identifying the calling SDK to the CLI
ENTRYPOINT_ENV_VAR = "CLAUDE_CODE_ENTRYPOINT"

# Separator for tool-name lists
TOOL_LIST_SEPARATOR = ","


def build_command(prompt: str, options: ClaudeCodeOptions, cli_path: str) -> List[str]:
    """
    Build the argument vector for one query.

    Args:
        prompt: The prompt, always passed as the final argument
        options: Per-query configuration
        cli_path: Resolved path to the CLI binary

    Returns:
        List of arguments, executable first. Never joined into a shell string.
    """
    args = [cli_path, "--output-format", "stream-json", "--verbose"]

    if options.system_prompt is not None:
        args.extend(["--system-prompt", options.system_prompt])

    if options.append_system_prompt is not None:
        args.extend(["--append-system-prompt", options.append_system_prompt])

    if options.allowed_tools:
        args.extend(
            ["--allowedTools", TOOL_LIST_SEPARATOR.join(options.allowed_tools)]
        )

    if options.disallowed_tools:
        args.extend(
            ["--disallowedTools", TOOL_LIST_SEPARATOR.join(options.disallowed_tools)]
        )

    if options.max_turns is not None:
        args.extend(["--max-turns", str(options.max_turns)])

    if options.model is not None:
        args.extend(["--model", options.model])

    if options.permission_prompt_tool_name is not None:
        args.extend(["--permission-prompt-tool", options.permission_prompt_tool_name])

    if options.permission_mode is not None:
        args.extend(["--permission-mode", options.permission_mode.value])

    if options.continue_conversation:
        args.append("--continue")

    if options.resume is not None:
        args.extend(["--resume", options.resume])

    if options.mcp_servers:
        args.extend(["--mcp-config", build_mcp_config(options)])

    args.extend(["--print", prompt])

    return args


def build_mcp_config(options: ClaudeCodeOptions) -> str:
    """Serialize MCP server definitions as the CLI's --mcp-config JSON."""
    servers = {
        name: server.model_dump(exclude_none=True)
        for name, server in options.mcp_servers.items()
    }
    return json.dumps({"mcpServers": servers})


def build_environment(
    entrypoint: str,
    base: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Build the environment for the CLI subprocess.

    Args:
        entrypoint: Value identifying this SDK to the CLI
        base: Environment to extend; defaults to a copy of os.environ

    Returns:
        New dict with the entrypoint variable set
    """
    env = dict(os.environ if base is None else base)
    env[ENTRYPOINT_ENV_VAR] = entrypoint
    return env
