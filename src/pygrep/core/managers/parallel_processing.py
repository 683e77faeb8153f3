"""
Thread pool orchestration for search operations.

Every candidate file becomes one task on a ``ThreadPoolExecutor`` sized to the
machine (or to ``SearchConfig.workers``). Tasks share nothing but the compiled
pattern, which is read-only, and the output writer, which serializes whole
blocks. A failing file is recorded and the remaining tasks carry on.

Classes:
    ParallelSearchManager: Runs a blocking strategy over files in a thread pool

Example:
    >>> from pygrep.core.managers.parallel_processing import ParallelSearchManager
    >>> manager = ParallelSearchManager(SearchConfig(workers=4), ErrorCollector(), get_logger())
    >>> stats = manager.search_files(candidates, pattern, DefaultStrategy(), SerializedWriter())
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from ...search.matchers import CompiledPattern
from ...search.strategies import SearchStrategy, TextSink
from ...utils.error_handling import ErrorCollector, SearchError, handle_file_error
from ...utils.logging_config import SearchLogger
from ..config import SearchConfig
from ..types import CandidatePath, FileOutcome, SearchStats


class ParallelSearchManager:
    """Manages thread pool search execution."""

    def __init__(
        self, config: SearchConfig, error_collector: ErrorCollector, logger: SearchLogger
    ) -> None:
        self.config = config
        self.error_collector = error_collector
        self.logger = logger

    def get_worker_count(self, file_count: int) -> int:
        """Pool size: configured or CPU count, never more than there are files."""
        return max(1, min(self.config.resolve_workers(), file_count))

    def search_files(
        self,
        candidates: list[CandidatePath],
        pattern: CompiledPattern,
        strategy: SearchStrategy,
        writer: TextSink,
    ) -> SearchStats:
        """
        Run ``strategy`` over every candidate and wait for all of them.

        Args:
            candidates: Glob results; unresolved ones are skipped
            pattern: Compiled pattern shared by all workers
            strategy: Blocking strategy invoked once per file
            writer: Shared, thread-safe output sink

        Returns:
            Run statistics. Per-file failures are counted, never raised.
        """
        stats = SearchStats()
        if not candidates:
            return stats

        workers = self.get_worker_count(len(candidates))
        self.logger.debug(f"Searching {len(candidates)} candidates with {workers} threads")

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pygrep") as executor:
            futures = {
                executor.submit(self._search_file, candidate, pattern, strategy, writer): candidate
                for candidate in candidates
            }

            for future in as_completed(futures):
                candidate = futures[future]
                try:
                    outcome = future.result()
                except (SearchError, OSError, UnicodeError) as e:
                    stats.errors += 1
                    handle_file_error(
                        candidate.path or Path(), "search", e, self.error_collector, self.logger
                    )
                    continue

                if outcome is None:
                    stats.files_skipped += 1
                else:
                    stats.record(outcome)

        return stats

    def _search_file(
        self,
        candidate: CandidatePath,
        pattern: CompiledPattern,
        strategy: SearchStrategy,
        writer: TextSink,
    ) -> FileOutcome | None:
        if not candidate.ok or candidate.path is None:
            self.logger.log_file_skipped(str(candidate.error), "unresolved glob candidate")
            return None

        path = candidate.path
        try:
            handle = open(path, "r", encoding=self.config.encoding, newline="\n")
        except OSError as e:
            self.logger.log_file_skipped(str(path), str(e))
            return None

        with handle:
            return strategy.run(path, handle, pattern, writer)
