"""
Command-line interface implementation.

The CLI maps ``pygrep PATTERN GLOB`` onto a ``PyGrep`` run and turns
configuration errors into a message on stderr and a non-zero exit status.
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
