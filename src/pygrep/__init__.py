"""
pygrep: regex search over glob-selected files.

Given a regular expression and a file glob, pygrep scans every matching file
and prints the matching lines with their line number and column, the match
highlighted.

Two concurrency models are available for the same search:

- a thread pool running one blocking task per file (``PyGrep.grep``),
- an asyncio event loop with a cap on how many files are open at once
  (``PyGrep.async_grep``).

How each file is searched is a separate, pluggable strategy
(``SearchStrategy`` / ``AsyncSearchStrategy``), so the orchestration can be
reused with a different output.

Example Usage:
    API:
        >>> from pygrep import PyGrep, SearchRequest
        >>> engine = PyGrep(SearchRequest(pattern=r"TODO\\b", glob="src/**/*.py"))
        >>> stats = engine.grep()
        >>> print(stats.files_matched)

    CLI:
        $ pygrep 'TODO\\b' 'src/**/*.py'
        $ pygrep --mode parallel --stats 'def \\w+' '**/*.py'
"""

__version__ = "0.1.0"

from .core.api import PyGrep
from .core.config import SearchConfig
from .core.types import (
    CandidatePath,
    FileOutcome,
    MatchRange,
    MatchRecord,
    SearchMode,
    SearchRequest,
    SearchStats,
)
from .search.matchers import CompiledPattern, compile_pattern
from .search.strategies import (
    AsyncSearchStrategy,
    DefaultAsyncStrategy,
    DefaultStrategy,
    SearchStrategy,
)
from .utils.error_handling import (
    ConfigurationError,
    ErrorCollector,
    GlobError,
    GlobResolutionError,
    PatternError,
    SearchError,
)
from .utils.formatter import format_line

__all__ = [
    "__version__",
    # Engine
    "PyGrep",
    "SearchConfig",
    # Types
    "CandidatePath",
    "FileOutcome",
    "MatchRange",
    "MatchRecord",
    "SearchMode",
    "SearchRequest",
    "SearchStats",
    # Matching
    "CompiledPattern",
    "compile_pattern",
    "AsyncSearchStrategy",
    "DefaultAsyncStrategy",
    "DefaultStrategy",
    "SearchStrategy",
    "format_line",
    # Errors
    "ConfigurationError",
    "ErrorCollector",
    "GlobError",
    "GlobResolutionError",
    "PatternError",
    "SearchError",
]
