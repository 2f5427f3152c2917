"""
Line decoder for the CLI's stream-json output.

Each physical line must hold one complete JSON object. Blank lines are
skipped; anything else that is not a JSON object raises CLIJSONDecodeError.
"""

import json
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from claude_cli_sdk.config import get_settings
from claude_cli_sdk.errors import CLIJSONDecodeError


class NotAJSONObjectError(ValueError):
    """A line parsed as valid JSON but not as an object."""


def decode_line(
    line: Union[str, bytes],
    preview_length: Optional[int] = None,
) -> Optional[Dict[str, Any]]:
    """
    Decode a single line.

    Returns:
        The decoded object, or None for a blank line

    Raises:
        CLIJSONDecodeError: The line is not a JSON object
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")

    stripped = line.strip()
    if not stripped:
        return None

    if preview_length is None:
        preview_length = get_settings().decoder.preview_length

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise CLIJSONDecodeError(stripped, e, preview_length) from e

    if not isinstance(data, dict):
        error = NotAJSONObjectError(f"expected a JSON object, got {type(data).__name__}")
        raise CLIJSONDecodeError(stripped, error, preview_length)

    return data


def decode_lines(
    lines: Iterable[Union[str, bytes]],
    preview_length: Optional[int] = None,
) -> Iterator[Dict[str, Any]]:
    """Lazily decode lines, stopping at the first undecodable one."""
    for line in lines:
        data = decode_line(line, preview_length)
        if data is not None:
            yield data
