"""
Reader and writer adapters shared by the two orchestration modes.

SerializedWriter:
    Thread-safe text sink. Worker threads write whole per-file blocks through
    it; the lock keeps each block contiguous on the underlying stream.

AsyncLineReader:
    Line reader for coroutines. Lines are pulled off the event loop in
    batches with ``asyncio.to_thread`` and handed out one at a time, so each
    batch read is a suspension point where other files make progress.

AsyncStreamWriter:
    Coroutine-side sink. Each write holds an ``asyncio.Lock`` so a strategy
    has exclusive use of the stream while its block goes out.

If no stream is given the adapters write to whatever ``sys.stdout`` is at
write time, which keeps them usable under output capture.
"""

from __future__ import annotations

import asyncio
import sys
import threading
from collections import deque
from pathlib import Path
from typing import TextIO


class SerializedWriter:
    """Blocking text sink that writes each block under a thread lock."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, data: str) -> int:
        with self._lock:
            written = self.stream.write(data)
            self.stream.flush()
            return written

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()


class AsyncLineReader:
    """Async line iterator over a text stream, read in batches off the loop."""

    def __init__(self, stream: TextIO, chunk_size: int = 64 * 1024) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer: deque[str] = deque()
        self._eof = False

    @classmethod
    async def open(
        cls, path: Path, encoding: str = "utf-8", chunk_size: int = 64 * 1024
    ) -> AsyncLineReader:
        # Only "\n" ends a line; a lone "\r" stays part of the text.
        stream = await asyncio.to_thread(open, path, "r", encoding=encoding, newline="\n")
        return cls(stream, chunk_size)

    async def readline(self) -> str:
        """Return the next line with its newline, or ``""`` at end of stream."""
        if not self._buffer and not self._eof:
            lines = await asyncio.to_thread(self._stream.readlines, self._chunk_size)
            if lines:
                self._buffer.extend(lines)
            else:
                self._eof = True
        if self._buffer:
            return self._buffer.popleft()
        return ""

    def __aiter__(self) -> AsyncLineReader:
        return self

    async def __anext__(self) -> str:
        line = await self.readline()
        if not line:
            raise StopAsyncIteration
        return line

    async def aclose(self) -> None:
        await asyncio.to_thread(self._stream.close)

    async def __aenter__(self) -> AsyncLineReader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class AsyncStreamWriter:
    """Coroutine text sink that writes each block under an asyncio lock."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = asyncio.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    async def write(self, data: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self.stream.write, data)

    async def drain(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self.stream.flush)
