"""
Configuration module for pygrep.

``SearchConfig`` carries the tunables of a run: how wide the thread pool is,
how many files the asyncio mode may hold open at once, how files are decoded
and whether output is colored.

Example:
    >>> from pygrep.core.config import SearchConfig
    >>> config = SearchConfig(max_concurrent_files=4, color=False)
    >>> config.validate()
    >>> config.resolve_workers() >= 1
    True
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from ..utils.error_handling import ConfigurationError

DEFAULT_MAX_CONCURRENT_FILES = 8


@dataclass(slots=True)
class SearchConfig:
    # Parallel mode
    workers: int = 0  # 0 = auto(cpu_count)

    # Async mode
    max_concurrent_files: int = DEFAULT_MAX_CONCURRENT_FILES
    read_chunk_size: int = 64 * 1024  # size hint for each batch of lines read off-loop

    # Input / output
    encoding: str = "utf-8"
    color: bool = True

    # Error reporting
    max_errors: int = 100

    def resolve_workers(self) -> int:
        return self.workers or os.cpu_count() or 4

    def validate(self) -> None:
        if self.workers < 0:
            raise ConfigurationError(f"workers must be >= 0, got {self.workers}")
        if self.max_concurrent_files < 1:
            raise ConfigurationError(
                f"max_concurrent_files must be >= 1, got {self.max_concurrent_files}"
            )
        if self.read_chunk_size < 1:
            raise ConfigurationError(f"read_chunk_size must be >= 1, got {self.read_chunk_size}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding: {self.encoding}") from e
