"""
Core search engine.

- config: Run settings
- types: Requests, candidates, match records and statistics
- api: The ``PyGrep`` orchestrator
- managers: Thread pool and asyncio orchestration
"""

from .config import SearchConfig
from .types import (
    CandidatePath,
    FileOutcome,
    MatchRange,
    MatchRecord,
    SearchMode,
    SearchRequest,
    SearchStats,
)

__all__ = [
    "SearchConfig",
    "CandidatePath",
    "FileOutcome",
    "MatchRange",
    "MatchRecord",
    "SearchMode",
    "SearchRequest",
    "SearchStats",
]
