"""
Glob validation and expansion.

The standard library ``glob`` module does the expansion. It is lenient about
syntax (an unclosed ``[`` silently becomes a literal), so ``validate_glob``
rejects malformed patterns up front, before a single file is touched:

- a ``[`` character class must be closed by ``]``,
- ``**`` must be a whole path component (``src/**/*.py``, not ``src**``),
- runs of three or more ``*`` are not a wildcard.

Example:
    >>> from pygrep.utils.helpers import expand_glob
    >>> for candidate in expand_glob("src/**/*.py"):
    ...     if candidate.ok:
    ...         print(candidate.path)
"""

from __future__ import annotations

import glob as glob_mod
import os
from pathlib import Path

from ..core.types import CandidatePath
from .error_handling import GlobError, GlobResolutionError

_SEPARATORS = ("/", os.sep)


def _is_separator(ch: str) -> bool:
    return ch in _SEPARATORS


def validate_glob(pattern: str) -> None:
    """
    Check ``pattern`` for syntax errors.

    Raises:
        GlobError: If the pattern is empty or malformed
    """
    if not pattern:
        raise GlobError("Glob pattern is empty", pattern)

    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            # A leading ']' is a literal member of the class.
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise GlobError(f"Unclosed character class at position {i}", pattern, i)
            i = close + 1
            continue
        if ch == "*":
            run_end = i
            while run_end < n and pattern[run_end] == "*":
                run_end += 1
            run = run_end - i
            if run > 2:
                raise GlobError(
                    f"Wildcards are either '*' or '**', found {run} at position {i}",
                    pattern,
                    i,
                )
            if run == 2:
                before_ok = i == 0 or _is_separator(pattern[i - 1])
                after_ok = run_end == n or _is_separator(pattern[run_end])
                if not (before_ok and after_ok):
                    raise GlobError(
                        f"Recursive wildcard '**' must form a whole path component "
                        f"(position {i})",
                        pattern,
                        i,
                    )
            i = run_end
            continue
        i += 1


def expand_glob(pattern: str) -> list[CandidatePath]:
    """
    Validate and expand ``pattern`` into candidate paths, sorted.

    A candidate that disappears or cannot be stat'ed between expansion and
    resolution comes back as a ``CandidatePath`` carrying a
    ``GlobResolutionError`` instead of failing the whole expansion.

    Raises:
        GlobError: If the pattern is malformed
    """
    validate_glob(pattern)

    candidates: list[CandidatePath] = []
    for name in sorted(glob_mod.iglob(pattern, recursive=True, include_hidden=True)):
        path = Path(name)
        try:
            path.stat()
        except OSError as e:
            candidates.append(
                CandidatePath(
                    error=GlobResolutionError(f"Cannot resolve {name}: {e}", file_path=path)
                )
            )
            continue
        candidates.append(CandidatePath(path=path))
    return candidates


def is_regular_file(candidate: CandidatePath) -> bool:
    """True when the candidate resolved and points at a regular file."""
    return candidate.ok and candidate.path is not None and candidate.path.is_file()
