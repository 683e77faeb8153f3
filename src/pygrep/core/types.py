"""
Core data types for pygrep.

Key Types:
    MatchRange: UTF-8 byte offsets ``(start, end)`` of a match within a line
    SearchMode: The two orchestration modes (thread pool or asyncio)
    SearchRequest: The pattern and glob a run was started with
    CandidatePath: One glob expansion result, a path or a resolution error
    MatchRecord: A matching line, produced and consumed per line
    FileOutcome: What a strategy reports back for one file
    SearchStats: Counters for a whole run
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..utils.error_handling import GlobResolutionError

MatchRange = tuple[int, int]


class SearchMode(str, Enum):
    ASYNC = "async"
    PARALLEL = "parallel"


@dataclass(frozen=True, slots=True)
class SearchRequest:
    pattern: str
    glob: str


@dataclass(frozen=True, slots=True)
class CandidatePath:
    """A glob result. Exactly one of ``path`` and ``error`` is set."""

    path: Path | None = None
    error: GlobResolutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None


@dataclass(frozen=True, slots=True)
class MatchRecord:
    line_number: int
    match_range: MatchRange
    line: str


@dataclass(frozen=True, slots=True)
class FileOutcome:
    path: Path
    lines_matched: int = 0

    @property
    def matched(self) -> bool:
        return self.lines_matched > 0


@dataclass(slots=True)
class SearchStats:
    files_scanned: int = 0
    files_matched: int = 0
    lines_matched: int = 0
    files_skipped: int = 0
    errors: int = 0
    elapsed_ms: float = 0.0

    def record(self, outcome: FileOutcome) -> None:
        self.files_scanned += 1
        if outcome.matched:
            self.files_matched += 1
            self.lines_matched += outcome.lines_matched

    def summary_line(self) -> str:
        return (
            f"# files_scanned={self.files_scanned} files_matched={self.files_matched} "
            f"lines={self.lines_matched} skipped={self.files_skipped} errors={self.errors} "
            f"elapsed_ms={self.elapsed_ms:.2f}"
        )
