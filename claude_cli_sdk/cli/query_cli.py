"""Command line entry point for running queries through the SDK."""

import json
from typing import List, Optional

import typer

from claude_cli_sdk.errors import ClaudeSDKError, CLINotFoundError
from claude_cli_sdk.logging import setup_logging
from claude_cli_sdk.query import query as run_query
from claude_cli_sdk.query import query_stream
from claude_cli_sdk.serialization import message_to_dict
from claude_cli_sdk.transport.discovery import find_cli
from claude_cli_sdk.types import (
    AssistantMessage,
    ClaudeCodeOptions,
    Message,
    PermissionMode,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

app = typer.Typer(help="Run prompts through the Claude Code CLI")


def _split_tools(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [tool.strip() for tool in value.split(",") if tool.strip()]


def format_message(message: Message) -> str:
    """Human-readable one-message rendering."""
    if isinstance(message, AssistantMessage):
        parts = []
        for block in message.content:
            if isinstance(block, TextBlock):
                parts.append(block.text)
            elif isinstance(block, ToolUseBlock):
                parts.append(f"[tool_use {block.name} {json.dumps(block.input)}]")
            elif isinstance(block, ToolResultBlock):
                marker = " error" if block.is_error else ""
                parts.append(f"[tool_result{marker} {block.tool_use_id}]")
        return "\n".join(parts)
    if isinstance(message, UserMessage):
        return f"> {message.content}"
    if isinstance(message, SystemMessage):
        return f"[system:{message.subtype}]"
    if isinstance(message, ResultMessage):
        return (
            f"[result:{message.subtype}] turns={message.num_turns} "
            f"cost=${message.total_cost_usd:.4f} "
            f"duration={message.duration_ms}ms session={message.session_id}"
        )
    return repr(message)


@app.command()
def query(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    model: Optional[str] = typer.Option(None, help="Model identifier"),
    system_prompt: Optional[str] = typer.Option(None, help="System prompt"),
    allowed_tools: Optional[str] = typer.Option(
        None, help="Comma-separated tools to allow"
    ),
    disallowed_tools: Optional[str] = typer.Option(
        None, help="Comma-separated tools to deny"
    ),
    permission_mode: Optional[PermissionMode] = typer.Option(
        None, help="Permission mode"
    ),
    max_turns: Optional[int] = typer.Option(None, help="Maximum turns"),
    cwd: Optional[str] = typer.Option(None, help="Working directory for the CLI"),
    stream: bool = typer.Option(True, help="Print messages as they arrive"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON object per line"),
    log_level: str = typer.Option("WARNING", help="Log level for SDK diagnostics"),
):
    """Send a prompt and print the resulting messages."""
    setup_logging(log_level)

    options = ClaudeCodeOptions(
        model=model,
        system_prompt=system_prompt,
        allowed_tools=_split_tools(allowed_tools),
        disallowed_tools=_split_tools(disallowed_tools),
        permission_mode=permission_mode,
        max_turns=max_turns,
        cwd=cwd,
    )

    try:
        if stream:
            messages = query_stream(prompt, options)
        else:
            messages = run_query(prompt, options)
        for message in messages:
            if as_json:
                typer.echo(json.dumps(message_to_dict(message)))
            else:
                typer.echo(format_message(message))
    except ClaudeSDKError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def which():
    """Print the resolved Claude Code CLI path."""
    try:
        typer.echo(find_cli())
    except CLINotFoundError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
