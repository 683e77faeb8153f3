"""
Output formatting module for pygrep.

Turns a matching line into the display string printed under a file's header:

    <line number, right aligned>:<column, left aligned> <line, match highlighted>

Styles are rendered with rich so the same code path produces either ANSI
colored text for terminals or plain text for pipes and tests.

Key Functions:
    format_line: Render one matching line
    format_path: Render the per-file header
    format_block: Join a header and its rendered lines into one output block
    display_column: 1-based character column of a byte offset

Example:
    >>> from pygrep.utils.formatter import format_line
    >>> format_line("hello world!", 1, (6, 11), color=False)
    '     1:7   hello world!'
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.color import ColorSystem
from rich.style import Style

from ..core.types import MatchRange

LINE_NUMBER_WIDTH = 6
COLUMN_WIDTH = 3

LINE_NUMBER_STYLE = Style(color="blue")
COLUMN_STYLE = Style(color="cyan")
MATCH_STYLE = Style(color="red")
PATH_STYLE = Style(color="green")


def _paint(text: str, style: Style, color: bool) -> str:
    return style.render(text, color_system=ColorSystem.STANDARD if color else None)


def display_column(line: str, byte_offset: int) -> int:
    """Return the 1-based character column of ``byte_offset`` within ``line``."""
    prefix = line.encode("utf-8")[:byte_offset]
    return len(prefix.decode("utf-8")) + 1


def format_line(line: str, line_number: int, match_range: MatchRange, *, color: bool = True) -> str:
    """
    Format one matching line for display.

    Args:
        line: The line text, without its trailing newline
        line_number: 1-based line number within the file
        match_range: UTF-8 byte offsets ``(start, end)`` of the match in ``line``
        color: Emit ANSI styles when True, plain text otherwise

    Returns:
        The display string. The column counts characters, not bytes, so lines
        with multi-byte text before the match still point at the right place.
    """
    start, end = match_range
    encoded = line.encode("utf-8")
    prefix = encoded[:start].decode("utf-8")
    matched = encoded[start:end].decode("utf-8")
    suffix = encoded[end:].decode("utf-8")

    number = _paint(f"{line_number:>{LINE_NUMBER_WIDTH}}", LINE_NUMBER_STYLE, color)
    column = _paint(f"{len(prefix) + 1:<{COLUMN_WIDTH}}", COLUMN_STYLE, color)
    return f"{number}:{column} {prefix}{_paint(matched, MATCH_STYLE, color)}{suffix}"


def format_path(path: Path | str, *, color: bool = True) -> str:
    """Render the header line naming a file."""
    return _paint(str(path), PATH_STYLE, color)


def format_block(path: Path | str, lines: Sequence[str], *, color: bool = True) -> str:
    """
    Build the output block for one file.

    An empty ``lines`` gives an empty block: a file without matches prints
    nothing, not even its header.
    """
    if not lines:
        return ""
    return f"{format_path(path, color=color)}\n" + "\n".join(lines) + "\n"
