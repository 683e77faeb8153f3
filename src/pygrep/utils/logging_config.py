"""
Logging for pygrep.

Search results own stdout, so every log line goes to stderr or to a log
file. ``SearchLogger`` wraps one standard library logger and adds helpers for
the events a run produces: start, completion, a file skipped before it was
opened, and a file abandoned because of an error. Their keyword fields are
passed as ``extra`` so the JSON and structured formats can show them as
separate fields.

The CLI configures one process-wide logger through ``configure_logging``;
library code that was not handed a logger uses ``get_logger``.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from enum import Enum
from pathlib import Path
from typing import Any


class LogLevel(str, Enum):
    """Available log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelNamesMapping()[self.value]


class LogFormat(str, Enum):
    """Available log formats."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
    STRUCTURED = "structured"


# Anything on a record beyond these came in through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
_LOG_FILE_BACKUPS = 3


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message and the event fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class StructuredFormatter(logging.Formatter):
    """``time [LEVEL] logger: message | key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        text = f"{self.formatTime(record)} [{record.levelname}] {record.name}: {record.getMessage()}"
        fields = _extra_fields(record)
        if fields:
            text += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


_FORMATTERS = {
    LogFormat.SIMPLE: lambda: logging.Formatter("%(levelname)s: %(message)s"),
    LogFormat.DETAILED: lambda: logging.Formatter(
        "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"
    ),
    LogFormat.JSON: JsonFormatter,
    LogFormat.STRUCTURED: StructuredFormatter,
}


class SearchLogger:
    """
    Logger for one pygrep process.

    Args:
        name: Name of the underlying ``logging`` logger
        level: Minimum level that is emitted
        format_type: Line format for every handler
        log_file: Also write to this file, rotated at 10MB
        enable_console: Write to stderr
    """

    def __init__(
        self,
        name: str = "pygrep",
        level: LogLevel = LogLevel.WARNING,
        format_type: LogFormat = LogFormat.SIMPLE,
        log_file: Path | None = None,
        enable_console: bool = True,
    ) -> None:
        self.name = name
        self.level = level
        self.format_type = format_type
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if enable_console:
            self._add_handler(logging.StreamHandler(sys.stderr))
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(
                logging.handlers.RotatingFileHandler(
                    log_file,
                    maxBytes=_LOG_FILE_MAX_BYTES,
                    backupCount=_LOG_FILE_BACKUPS,
                    encoding="utf-8",
                )
            )
        self.set_level(level)

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(_FORMATTERS[self.format_type]())
        self.logger.addHandler(handler)

    def set_level(self, level: LogLevel) -> None:
        self.level = level
        self.logger.setLevel(level.numeric)

    def debug(self, message: str, **fields: Any) -> None:
        self.logger.debug(message, extra=fields)

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(message, extra=fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.logger.warning(message, extra=fields)

    def log_search_start(self, pattern: str, glob: str, mode: str) -> None:
        self.info(
            f"Searching {glob!r} for {pattern!r} ({mode})",
            event="search_start",
            pattern=pattern,
            glob=glob,
            mode=mode,
        )

    def log_search_complete(
        self, pattern: str, files_matched: int, elapsed_ms: float, **fields: Any
    ) -> None:
        self.info(
            f"Search for {pattern!r} done: {files_matched} files matched in {elapsed_ms:.2f}ms",
            event="search_complete",
            pattern=pattern,
            files_matched=files_matched,
            elapsed_ms=elapsed_ms,
            **fields,
        )

    def log_file_error(self, file_path: str, error: str, operation: str = "search") -> None:
        """A file was abandoned part way; the rest of the run goes on."""
        self.warning(
            f"{file_path}: {error}",
            event="file_error",
            file_path=file_path,
            operation=operation,
        )

    def log_file_skipped(self, file_path: str, reason: str) -> None:
        """A candidate was dropped before any of it was read."""
        self.debug(
            f"Skipping {file_path}: {reason}",
            event="file_skipped",
            file_path=file_path,
            reason=reason,
        )


_global_logger: SearchLogger | None = None


def get_logger() -> SearchLogger:
    """Get the process-wide logger, creating a default one on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SearchLogger()
    return _global_logger


def configure_logging(
    level: LogLevel = LogLevel.WARNING,
    format_type: LogFormat = LogFormat.SIMPLE,
    log_file: Path | None = None,
    enable_console: bool = True,
) -> SearchLogger:
    """Replace the process-wide logger."""
    global _global_logger
    _global_logger = SearchLogger(
        level=level,
        format_type=format_type,
        log_file=log_file,
        enable_console=enable_console,
    )
    return _global_logger
