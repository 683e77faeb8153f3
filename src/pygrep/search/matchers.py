"""
Pattern matching module for pygrep.

Wraps the ``regex`` engine behind a small immutable matcher. The matcher is
compiled once per run and shared by every worker thread and every asyncio
task; compiled patterns carry no mutable state, so sharing needs no locks and
no per-task copies.

Match positions are reported as UTF-8 byte offsets into the line, which is
what the formatter expects and what a byte-oriented reader of the output would
see. The formatter converts back to a character column for display.

Example:
    >>> from pygrep.search.matchers import compile_pattern
    >>> pattern = compile_pattern(r"wo\\w+")
    >>> pattern.find_first("hello world!")
    (6, 11)
    >>> pattern.find_first("héllo world!")
    (7, 12)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import regex as regex_mod  # better regex engine

from ..core.types import MatchRange
from ..utils.error_handling import PatternError


def _byte_range(line: str, start: int, end: int) -> MatchRange:
    if line.isascii():
        return start, end
    byte_start = len(line[:start].encode("utf-8"))
    return byte_start, byte_start + len(line[start:end].encode("utf-8"))


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled regular expression shared read-only across a run."""

    source: str
    compiled: regex_mod.Pattern

    def find_first(self, line: str) -> MatchRange | None:
        """Return the byte range of the first match in ``line``, or None."""
        m = self.compiled.search(line)
        if m is None:
            return None
        return _byte_range(line, m.start(), m.end())

    def find_all(self, line: str) -> list[MatchRange]:
        """Return the byte ranges of every non-overlapping match in ``line``."""
        return list(self.iter_matches(line))

    def iter_matches(self, line: str) -> Iterator[MatchRange]:
        for m in self.compiled.finditer(line):
            yield _byte_range(line, m.start(), m.end())

    def __str__(self) -> str:
        return self.source


def compile_pattern(pattern: str, flags: int = 0) -> CompiledPattern:
    """
    Compile ``pattern`` with the ``regex`` engine.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    try:
        compiled = regex_mod.compile(pattern, flags=flags)
    except regex_mod.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}: {e}", pattern) from e
    return CompiledPattern(source=pattern, compiled=compiled)
