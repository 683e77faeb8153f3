"""
Asyncio orchestration with a bounded number of open files.

All files are searched from one event loop by a fixed pool of worker tasks.
The pool has ``max_concurrent_files`` workers (8 by default), each pulling the
next path off a shared ``asyncio.Queue`` and holding at most one file open,
so a glob over a huge tree cannot exhaust file descriptors and no per-file
coroutine exists before a worker picks the file up. The order files are
taken in is up to the scheduler.

Classes:
    AsyncSearchManager: Runs a coroutine strategy over files with bounded concurrency
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from ...search.matchers import CompiledPattern
from ...search.strategies import AsyncSearchStrategy
from ...utils.error_handling import ErrorCollector, SearchError, handle_file_error
from ...utils.helpers import is_regular_file
from ...utils.logging_config import SearchLogger
from ...utils.streams import AsyncLineReader, AsyncStreamWriter
from ..config import SearchConfig
from ..types import CandidatePath, SearchStats


class AsyncSearchManager:
    """Manages bounded-concurrency search on the event loop."""

    def __init__(
        self, config: SearchConfig, error_collector: ErrorCollector, logger: SearchLogger
    ) -> None:
        self.config = config
        self.error_collector = error_collector
        self.logger = logger

    def get_worker_count(self, file_count: int) -> int:
        """Number of worker tasks: the concurrency ceiling, never more than there are files."""
        return max(1, min(self.config.max_concurrent_files, file_count))

    async def search_files(
        self,
        candidates: list[CandidatePath],
        pattern: CompiledPattern,
        strategy: AsyncSearchStrategy,
        writer: AsyncStreamWriter,
    ) -> SearchStats:
        """
        Run ``strategy`` over every regular file among ``candidates``.

        Args:
            candidates: Glob results; unresolved entries and non-files are dropped
            pattern: Compiled pattern shared by all workers
            strategy: Coroutine strategy awaited once per file
            writer: Shared output sink

        Returns:
            Run statistics once every file has been processed.
        """
        stats = SearchStats()
        work_queue: asyncio.Queue[Path] = asyncio.Queue()
        for candidate in candidates:
            if is_regular_file(candidate) and candidate.path is not None:
                work_queue.put_nowait(candidate.path)
            else:
                stats.files_skipped += 1
                if candidate.error is not None:
                    self.logger.log_file_skipped(str(candidate.error), "unresolved glob candidate")
                else:
                    self.logger.log_file_skipped(str(candidate.path), "not a regular file")

        if work_queue.empty():
            return stats

        async def worker() -> None:
            while True:
                try:
                    path = work_queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                await self._search_file(path, pattern, strategy, writer, stats)

        workers = self.get_worker_count(work_queue.qsize())
        self.logger.debug(f"Searching {work_queue.qsize()} files with {workers} workers")
        await asyncio.gather(*(worker() for _ in range(workers)))
        return stats

    async def _search_file(
        self,
        path: Path,
        pattern: CompiledPattern,
        strategy: AsyncSearchStrategy,
        writer: AsyncStreamWriter,
        stats: SearchStats,
    ) -> None:
        try:
            reader = await AsyncLineReader.open(
                path, self.config.encoding, self.config.read_chunk_size
            )
        except OSError as e:
            stats.files_skipped += 1
            self.logger.log_file_skipped(str(path), str(e))
            return

        try:
            async with reader:
                outcome = await strategy.run(path, reader, pattern, writer)
        except (SearchError, OSError, UnicodeError) as e:
            stats.errors += 1
            handle_file_error(path, "search", e, self.error_collector, self.logger)
            return

        stats.record(outcome)
