"""
Utility functions and helper modules.

- Error handling and reporting
- Logging configuration
- Output formatting
- Glob validation and expansion
- Reader and writer adapters for threads and coroutines
"""

from .error_handling import (
    ConfigurationError,
    EncodingError,
    ErrorCollector,
    FileAccessError,
    GlobError,
    GlobResolutionError,
    OutputError,
    PatternError,
    PermissionError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from .logging_config import SearchLogger, configure_logging, get_logger
from .formatter import format_block, format_line, format_path
from .helpers import expand_glob, validate_glob
from .streams import AsyncLineReader, AsyncStreamWriter, SerializedWriter

__all__ = [
    # Error handling
    "ConfigurationError",
    "EncodingError",
    "ErrorCollector",
    "FileAccessError",
    "GlobError",
    "GlobResolutionError",
    "OutputError",
    "PatternError",
    "PermissionError",
    "SearchError",
    "create_error_report",
    "handle_file_error",
    # Logging
    "SearchLogger",
    "configure_logging",
    "get_logger",
    # Formatting
    "format_block",
    "format_line",
    "format_path",
    # Globs
    "expand_glob",
    "validate_glob",
    # Streams
    "AsyncLineReader",
    "AsyncStreamWriter",
    "SerializedWriter",
]
