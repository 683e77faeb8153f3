"""
Main API module for pygrep.

``PyGrep`` owns one run: it compiles the pattern, validates and expands the
glob, and hands the files to a strategy under one of two concurrency models.

- ``grep`` / ``grep_with``: a thread pool, one blocking task per file.
- ``async_grep`` / ``async_grep_with``: one event loop, at most
  ``SearchConfig.max_concurrent_files`` files open at once.

Only configuration problems (a bad regex, a bad glob, an impossible setting)
raise. They are detected before any file is opened. Everything that goes
wrong with an individual file is logged, collected in ``error_collector`` and
counted in the returned ``SearchStats``; the run still completes.

Example:
    >>> from pygrep import PyGrep, SearchRequest
    >>> engine = PyGrep(SearchRequest(pattern=r"def \\w+", glob="src/**/*.py"))
    >>> stats = engine.grep()
    >>> stats = asyncio.run(engine.async_grep())
"""

from __future__ import annotations

import asyncio
import time
from typing import TextIO

from ..search.matchers import CompiledPattern, compile_pattern
from ..search.strategies import (
    AsyncSearchStrategy,
    DefaultAsyncStrategy,
    DefaultStrategy,
    SearchStrategy,
)
from ..utils.error_handling import ErrorCollector, create_error_report
from ..utils.helpers import expand_glob
from ..utils.logging_config import SearchLogger, get_logger
from ..utils.streams import AsyncStreamWriter, SerializedWriter
from .config import SearchConfig
from .managers.async_processing import AsyncSearchManager
from .managers.parallel_processing import ParallelSearchManager
from .types import CandidatePath, SearchMode, SearchRequest, SearchStats


class PyGrep:
    """
    Search orchestrator for one request.

    Args:
        request: Pattern and glob to search with
        config: Run settings; defaults are used when omitted
        output: Stream results are written to; ``sys.stdout`` when omitted
        logger: Logger to report progress and per-file errors to

    Raises:
        ConfigurationError: If ``config`` is invalid
    """

    def __init__(
        self,
        request: SearchRequest,
        config: SearchConfig | None = None,
        output: TextIO | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.request = request
        self.config = config or SearchConfig()
        self.config.validate()
        self.output = output
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector(max_errors=self.config.max_errors)

    def prepare(self) -> tuple[CompiledPattern, list[CandidatePath]]:
        """
        Compile the pattern and expand the glob.

        Raises:
            PatternError: If the pattern is not a valid regex
            GlobError: If the glob is malformed
        """
        pattern = compile_pattern(self.request.pattern)
        candidates = expand_glob(self.request.glob)
        return pattern, candidates

    def grep(self) -> SearchStats:
        return self.grep_with(DefaultStrategy(color=self.config.color))

    def grep_with(self, strategy: SearchStrategy) -> SearchStats:
        """Search every file in a thread pool using ``strategy``."""
        start = time.perf_counter()
        pattern, candidates = self.prepare()
        self.logger.log_search_start(
            self.request.pattern, self.request.glob, SearchMode.PARALLEL.value
        )

        manager = ParallelSearchManager(self.config, self.error_collector, self.logger)
        stats = manager.search_files(candidates, pattern, strategy, SerializedWriter(self.output))
        return self._finish(stats, start)

    async def async_grep(self) -> SearchStats:
        return await self.async_grep_with(DefaultAsyncStrategy(color=self.config.color))

    async def async_grep_with(self, strategy: AsyncSearchStrategy) -> SearchStats:
        """Search every file on the running event loop using ``strategy``."""
        start = time.perf_counter()
        pattern, candidates = self.prepare()
        self.logger.log_search_start(self.request.pattern, self.request.glob, SearchMode.ASYNC.value)

        manager = AsyncSearchManager(self.config, self.error_collector, self.logger)
        stats = await manager.search_files(
            candidates, pattern, strategy, AsyncStreamWriter(self.output)
        )
        return self._finish(stats, start)

    def run(self, mode: SearchMode = SearchMode.ASYNC) -> SearchStats:
        """Run the default strategy in ``mode``, blocking until done."""
        if mode == SearchMode.PARALLEL:
            return self.grep()
        return asyncio.run(self.async_grep())

    def _finish(self, stats: SearchStats, start: float) -> SearchStats:
        stats.elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.logger.log_search_complete(
            self.request.pattern,
            stats.files_matched,
            stats.elapsed_ms,
            files_scanned=stats.files_scanned,
            errors=stats.errors,
        )
        return stats

    def has_errors(self) -> bool:
        return bool(self.error_collector.errors)

    def get_error_report(self) -> str:
        return create_error_report(self.error_collector)
