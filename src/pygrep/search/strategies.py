"""
Search strategies: how one file's lines become formatted output.

A strategy knows nothing about globs, pools or event loops. It gets a path, a
line source, the compiled pattern and a sink, and writes the file's block:

    <path>
    <formatted matching line>
    ...

Only the first match on each line is reported. A file without matches writes
nothing at all. The whole block goes out in a single write, so concurrent
files may interleave block by block but never line by line.

Classes:
    SearchStrategy: Blocking strategy, driven from worker threads
    AsyncSearchStrategy: Coroutine strategy, driven from the event loop
    DefaultStrategy: Standard grep output for the thread pool mode
    DefaultAsyncStrategy: Standard grep output for the asyncio mode

Example:
    >>> import io
    >>> from pygrep.search.matchers import compile_pattern
    >>> out = io.StringIO()
    >>> DefaultStrategy(color=False).run(
    ...     Path("a.txt"), io.StringIO("hello world!\\n"), compile_pattern(r"wo\\w+"), out
    ... )
    FileOutcome(path=PosixPath('a.txt'), lines_matched=1)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from ..core.types import FileOutcome, MatchRecord
from ..utils.error_handling import OutputError, classify_file_error
from ..utils.formatter import format_block, format_line
from ..utils.streams import AsyncLineReader, AsyncStreamWriter
from .matchers import CompiledPattern


class TextSink(Protocol):
    """Anything with a text ``write`` method, such as a file or ``SerializedWriter``."""

    def write(self, data: str, /) -> int | None: ...


def strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def match_line(line: str, line_number: int, pattern: CompiledPattern) -> MatchRecord | None:
    """Match ``line`` (newline included or not) and return a record for the first hit."""
    text = strip_newline(line)
    match_range = pattern.find_first(text)
    if match_range is None:
        return None
    return MatchRecord(line_number=line_number, match_range=match_range, line=text)


class SearchStrategy(ABC):
    """Turns one file into formatted matches with blocking IO."""

    @abstractmethod
    def run(
        self,
        path: Path,
        reader: Iterable[str],
        pattern: CompiledPattern,
        writer: TextSink,
    ) -> FileOutcome:
        """Search ``reader`` and write the file's block to ``writer``.

        Raises:
            SearchError: On a read or write failure; scoped to this file
        """


class AsyncSearchStrategy(ABC):
    """Turns one file into formatted matches, suspending on IO."""

    @abstractmethod
    async def run(
        self,
        path: Path,
        reader: AsyncLineReader,
        pattern: CompiledPattern,
        writer: AsyncStreamWriter,
    ) -> FileOutcome:
        """Search ``reader`` and write the file's block to ``writer``.

        Raises:
            SearchError: On a read or write failure; scoped to this file
        """


class DefaultStrategy(SearchStrategy):
    def __init__(self, color: bool = True) -> None:
        self.color = color

    def run(
        self,
        path: Path,
        reader: Iterable[str],
        pattern: CompiledPattern,
        writer: TextSink,
    ) -> FileOutcome:
        finds: list[str] = []
        try:
            for lineno, line in enumerate(reader, start=1):
                record = match_line(line, lineno, pattern)
                if record is not None:
                    finds.append(
                        format_line(record.line, lineno, record.match_range, color=self.color)
                    )
        except (OSError, UnicodeError) as e:
            raise classify_file_error(path, "read", e) from e

        if finds:
            block = format_block(path, finds, color=self.color)
            try:
                writer.write(block)
            except OSError as e:
                raise OutputError(f"Cannot write results for {path}: {e}", path) from e

        return FileOutcome(path=path, lines_matched=len(finds))


class DefaultAsyncStrategy(AsyncSearchStrategy):
    def __init__(self, color: bool = True) -> None:
        self.color = color

    async def run(
        self,
        path: Path,
        reader: AsyncLineReader,
        pattern: CompiledPattern,
        writer: AsyncStreamWriter,
    ) -> FileOutcome:
        finds: list[str] = []
        lineno = 0
        try:
            async for line in reader:
                lineno += 1
                record = match_line(line, lineno, pattern)
                if record is not None:
                    finds.append(
                        format_line(record.line, lineno, record.match_range, color=self.color)
                    )
        except (OSError, UnicodeError) as e:
            raise classify_file_error(path, "read", e) from e

        if finds:
            block = format_block(path, finds, color=self.color)
            try:
                await writer.write(block)
                await writer.drain()
            except OSError as e:
                raise OutputError(f"Cannot write results for {path}: {e}", path) from e

        return FileOutcome(path=path, lines_matched=len(finds))
