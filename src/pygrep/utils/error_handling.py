"""
Error handling and reporting for pygrep.

Errors fall into two groups. Configuration errors (a bad regex, a bad glob,
an impossible setting) are fatal and surface before any file is opened.
Everything else is scoped to a single file: the file is abandoned, the error
is recorded, and the run carries on with the other files.

Each error type carries its category, its severity and an optional hint as
class attributes, so raising one is just ``EncodingError(message, path)``.

Classes:
    ErrorCategory: What kind of thing went wrong
    ErrorSeverity: How bad it is for the run
    SearchError: Base exception for pygrep errors
    ErrorRecord: One collected per-file error
    ErrorCollector: Thread-safe store of per-file errors

Functions:
    classify_file_error: Wrap an OSError or UnicodeError raised by file IO
    handle_file_error: Classify, collect and log a per-file error
    create_error_report: Render collected errors as text

Example:
    >>> collector = ErrorCollector()
    >>> try:
    ...     Path("missing.txt").read_text()
    ... except OSError as e:
    ...     handle_file_error(Path("missing.txt"), "read", e, collector)
    >>> collector.total()
    1
"""

from __future__ import annotations

import builtins
import threading
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .logging_config import SearchLogger

BuiltinPermissionError = builtins.PermissionError


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ENCODING = "encoding"
    OUTPUT = "output"
    PATTERN = "pattern"
    GLOB = "glob"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    """LOW and MEDIUM lose one file, HIGH loses output, CRITICAL stops the run."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SearchError(Exception):
    """Base exception for search-related errors."""

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.MEDIUM
    hint: str | None = None

    def __init__(self, message: str, file_path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path

    @property
    def fatal(self) -> bool:
        return self.severity == ErrorSeverity.CRITICAL


class FileAccessError(SearchError):
    """Reading a file failed at the OS level."""

    category = ErrorCategory.FILE_ACCESS


class PermissionError(SearchError):
    """The file exists but may not be read."""

    category = ErrorCategory.PERMISSION
    hint = "check file permissions or narrow the glob to readable files"


class EncodingError(SearchError):
    """The file is not valid text in the configured encoding."""

    category = ErrorCategory.ENCODING
    severity = ErrorSeverity.LOW

    def __init__(self, message: str, file_path: Path, encoding: str = "utf-8") -> None:
        super().__init__(message, file_path)
        self.encoding = encoding

    @property
    def hint(self) -> str:  # type: ignore[override]
        return f"file is not {self.encoding} text; use --encoding or exclude binary files"


class OutputError(SearchError):
    """Writing a file's results to the output stream failed."""

    category = ErrorCategory.OUTPUT
    severity = ErrorSeverity.HIGH


class GlobResolutionError(SearchError):
    """A single glob candidate could not be resolved."""

    category = ErrorCategory.FILE_ACCESS
    severity = ErrorSeverity.LOW


class ConfigurationError(SearchError):
    """A setting makes the run impossible. Always fatal."""

    category = ErrorCategory.CONFIGURATION
    severity = ErrorSeverity.CRITICAL


class PatternError(ConfigurationError):
    """The search pattern is not a valid regular expression."""

    category = ErrorCategory.PATTERN
    hint = "escape regex metacharacters such as '[', '(' and '\\'"

    def __init__(self, message: str, pattern: str) -> None:
        super().__init__(message)
        self.pattern = pattern


class GlobError(ConfigurationError):
    """The file glob is malformed."""

    category = ErrorCategory.GLOB
    hint = "'**' must be a whole path component, e.g. 'src/**/*.py'"

    def __init__(self, message: str, glob: str, position: int | None = None) -> None:
        super().__init__(message)
        self.glob = glob
        self.position = position


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """One per-file error as kept by ``ErrorCollector``."""

    file_path: Path | None
    operation: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    hint: str | None = None

    @classmethod
    def from_error(cls, error: SearchError, operation: str) -> ErrorRecord:
        return cls(
            file_path=error.file_path,
            operation=operation,
            category=error.category,
            severity=error.severity,
            message=error.message,
            hint=error.hint,
        )


class ErrorCollector:
    """Collects per-file errors from all workers of a run.

    Counting never stops, but only the first ``max_errors`` records are kept
    so a glob over thousands of binary files cannot grow the report without
    bound.
    """

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorRecord] = []
        self._counts: Counter[ErrorCategory] = Counter()
        self._lock = threading.Lock()

    def add_error(self, error: SearchError, operation: str = "search") -> None:
        record = ErrorRecord.from_error(error, operation)
        with self._lock:
            self._counts[record.category] += 1
            if len(self.errors) < self.max_errors:
                self.errors.append(record)

    def total(self) -> int:
        """Number of errors seen, including those past ``max_errors``."""
        with self._lock:
            return sum(self._counts.values())

    def by_category(self) -> dict[str, int]:
        with self._lock:
            return {category.value: count for category, count in self._counts.most_common()}

    def clear(self) -> None:
        with self._lock:
            self.errors.clear()
            self._counts.clear()


def classify_file_error(file_path: Path, operation: str, exception: Exception) -> SearchError:
    """Wrap a raw exception from file IO in the matching ``SearchError``."""
    if isinstance(exception, SearchError):
        return exception
    if isinstance(exception, BuiltinPermissionError):
        return PermissionError(f"Permission denied during {operation}: {exception}", file_path)
    if isinstance(exception, UnicodeError):
        encoding = getattr(exception, "encoding", None) or "utf-8"
        return EncodingError(f"Cannot decode {file_path}: {exception}", file_path, encoding)
    if isinstance(exception, OSError):
        return FileAccessError(f"Cannot {operation} {file_path}: {exception}", file_path)
    return SearchError(f"Unexpected error during {operation}: {exception}", file_path)


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: Exception,
    error_collector: ErrorCollector | None = None,
    logger: SearchLogger | None = None,
) -> SearchError:
    """
    Classify a per-file failure, record it and log it at WARNING.

    Args:
        file_path: File being searched when the error happened
        operation: What was being done, e.g. "read" or "search"
        exception: The exception that was caught
        error_collector: Collector to record the error in
        logger: Logger to report the error to

    Returns:
        The classified error
    """
    error = classify_file_error(file_path, operation, exception)

    if error_collector is not None:
        error_collector.add_error(error, operation)

    if logger is not None:
        logger.log_file_error(str(file_path), error.message, operation=operation)

    return error


def create_error_report(error_collector: ErrorCollector) -> str:
    """Render the collected errors for ``--debug`` output."""
    total = error_collector.total()
    if total == 0:
        return "No errors occurred during the search operation."

    shown = len(error_collector.errors)
    lines = ["Search Error Report", "=" * 50, f"Total errors: {total}"]
    if shown < total:
        lines.append(f"(first {shown} listed)")

    lines.append("")
    lines.append("Errors by category:")
    lines.extend(f"  {category}: {count}" for category, count in error_collector.by_category().items())

    lines.append("")
    lines.append("Files:")
    for record in error_collector.errors:
        lines.append(f"  - [{record.severity.value}] {record.file_path} ({record.operation}): {record.message}")
        if record.hint:
            lines.append(f"    hint: {record.hint}")

    return "\n".join(lines)
