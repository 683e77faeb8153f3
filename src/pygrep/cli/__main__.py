"""
CLI entry point for pygrep.

This module serves as the entry point when pygrep.cli is executed as a module
with `python -m pygrep.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
