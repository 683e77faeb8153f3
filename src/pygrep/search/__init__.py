"""
Matching and per-file search strategies.
"""

from .matchers import CompiledPattern, compile_pattern
from .strategies import (
    AsyncSearchStrategy,
    DefaultAsyncStrategy,
    DefaultStrategy,
    SearchStrategy,
)

__all__ = [
    "CompiledPattern",
    "compile_pattern",
    "AsyncSearchStrategy",
    "DefaultAsyncStrategy",
    "DefaultStrategy",
    "SearchStrategy",
]
