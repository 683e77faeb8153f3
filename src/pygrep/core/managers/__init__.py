"""
Orchestration managers.

- parallel_processing: One blocking task per file on a thread pool
- async_processing: Bounded-concurrency tasks on an asyncio event loop
"""

from .async_processing import AsyncSearchManager
from .parallel_processing import ParallelSearchManager

__all__ = [
    "AsyncSearchManager",
    "ParallelSearchManager",
]
