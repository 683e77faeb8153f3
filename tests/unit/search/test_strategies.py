"""Tests for pygrep.search.strategies module."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pygrep.core.types import FileOutcome
from pygrep.search.matchers import compile_pattern
from pygrep.search.strategies import (
    AsyncSearchStrategy,
    DefaultAsyncStrategy,
    DefaultStrategy,
    SearchStrategy,
    match_line,
    strip_newline,
)
from pygrep.utils.error_handling import EncodingError, OutputError
from pygrep.utils.formatter import format_line, format_path
from pygrep.utils.streams import AsyncLineReader, AsyncStreamWriter

PATH = Path("src/main.rs")
INPUT = "hello world!\nbye world!"


def expected_output(color: bool) -> str:
    lines = [
        format_path(PATH, color=color),
        format_line("hello world!", 1, (6, 11), color=color),
        format_line("bye world!", 2, (4, 9), color=color),
    ]
    return "\n".join(lines) + "\n"


class BrokenWriter:
    def write(self, data: str) -> int:
        raise OSError("stream closed")


class BadReader:
    """Yields one line, then fails like a decoder hitting invalid bytes."""

    def __iter__(self):
        yield "hello world\n"
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


class TestHelpers:
    @pytest.mark.parametrize(
        "raw, stripped",
        [("a\n", "a"), ("a\r\n", "a"), ("a", "a"), ("\n", ""), ("a\r", "a\r")],
    )
    def test_strip_newline(self, raw, stripped):
        assert strip_newline(raw) == stripped

    def test_match_line(self):
        record = match_line("bye world!\n", 2, compile_pattern(r"wo\w+"))
        assert record is not None
        assert record.line_number == 2
        assert record.match_range == (4, 9)
        assert record.line == "bye world!"

    def test_match_line_none(self):
        assert match_line("nothing\n", 1, compile_pattern("xyz")) is None


class TestDefaultStrategy:
    def test_is_search_strategy(self):
        assert isinstance(DefaultStrategy(), SearchStrategy)

    @pytest.mark.parametrize("color", [True, False])
    def test_scenario_output(self, color):
        writer = io.StringIO()
        outcome = DefaultStrategy(color=color).run(
            PATH, io.StringIO(INPUT), compile_pattern(r"wo\w+"), writer
        )
        assert writer.getvalue() == expected_output(color)
        assert outcome == FileOutcome(path=PATH, lines_matched=2)

    def test_no_match_writes_nothing(self):
        writer = io.StringIO()
        outcome = DefaultStrategy().run(PATH, io.StringIO(INPUT), compile_pattern("xyz"), writer)
        assert writer.getvalue() == ""
        assert not outcome.matched

    def test_empty_input(self):
        writer = io.StringIO()
        outcome = DefaultStrategy().run(PATH, io.StringIO(""), compile_pattern("."), writer)
        assert writer.getvalue() == ""
        assert outcome.lines_matched == 0

    def test_line_numbers_count_blank_lines(self):
        text = "\n\nmatch\n\n\nmatch again\nno"
        writer = io.StringIO()
        DefaultStrategy(color=False).run(PATH, io.StringIO(text), compile_pattern("match"), writer)
        out = writer.getvalue().splitlines()
        assert out[0] == "src/main.rs"
        assert out[1] == format_line("match", 3, (0, 5), color=False)
        assert out[2] == format_line("match again", 6, (0, 5), color=False)
        assert len(out) == 3

    def test_single_write_per_file(self):
        calls: list[str] = []

        class Recorder:
            def write(self, data: str) -> int:
                calls.append(data)
                return len(data)

        DefaultStrategy().run(PATH, io.StringIO(INPUT), compile_pattern("world"), Recorder())
        assert len(calls) == 1

    def test_read_error_is_file_scoped(self):
        writer = io.StringIO()
        with pytest.raises(EncodingError) as exc_info:
            DefaultStrategy().run(PATH, BadReader(), compile_pattern("hello"), writer)
        assert exc_info.value.file_path == PATH
        assert writer.getvalue() == ""

    def test_write_error(self):
        with pytest.raises(OutputError):
            DefaultStrategy().run(PATH, io.StringIO(INPUT), compile_pattern("world"), BrokenWriter())


class TestDefaultAsyncStrategy:
    def test_is_async_search_strategy(self):
        assert isinstance(DefaultAsyncStrategy(), AsyncSearchStrategy)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("color", [True, False])
    async def test_scenario_output(self, color):
        sink = io.StringIO()
        outcome = await DefaultAsyncStrategy(color=color).run(
            PATH,
            AsyncLineReader(io.StringIO(INPUT)),
            compile_pattern(r"wo\w+"),
            AsyncStreamWriter(sink),
        )
        assert sink.getvalue() == expected_output(color)
        assert outcome.lines_matched == 2

    @pytest.mark.asyncio
    async def test_no_match_writes_nothing(self):
        sink = io.StringIO()
        outcome = await DefaultAsyncStrategy().run(
            PATH, AsyncLineReader(io.StringIO(INPUT)), compile_pattern("xyz"), AsyncStreamWriter(sink)
        )
        assert sink.getvalue() == ""
        assert not outcome.matched

    @pytest.mark.asyncio
    async def test_small_chunks_keep_line_numbers(self):
        text = "".join(f"line {i}\n" for i in range(1, 101))
        sink = io.StringIO()
        await DefaultAsyncStrategy(color=False).run(
            PATH,
            AsyncLineReader(io.StringIO(text), chunk_size=16),
            compile_pattern(r"line (7|77)$"),
            AsyncStreamWriter(sink),
        )
        out = sink.getvalue().splitlines()
        assert out[1] == format_line("line 7", 7, (0, 6), color=False)
        assert out[2] == format_line("line 77", 77, (0, 7), color=False)

    @pytest.mark.asyncio
    async def test_read_error_is_file_scoped(self, tmp_path: Path):
        bad = tmp_path / "bad.txt"
        bad.write_bytes(b"hello\n\xff\xfe\n")
        reader = await AsyncLineReader.open(bad)
        sink = io.StringIO()
        with pytest.raises(EncodingError):
            async with reader:
                await DefaultAsyncStrategy().run(
                    bad, reader, compile_pattern("hello"), AsyncStreamWriter(sink)
                )
        assert sink.getvalue() == ""
