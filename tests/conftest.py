"""
Shared test fixtures and utilities for pygrep tests.

This module provides common fixtures, sample file trees, and helper functions
used across the test suite.
"""

from pathlib import Path

import pytest

from pygrep import SearchConfig
from pygrep.utils import logging_config
from pygrep.utils.logging_config import LogLevel, SearchLogger

# Test data constants
HELLO_TEXT = "hello world!\nbye world!"

SAMPLE_NOTES = """\
first line
the world is wide

another world here
nothing to see
"""

SAMPLE_PYTHON_CODE = """\
def foo():
    return "ok"

class Bar:
    def baz(self):
        return foo()
"""


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Keep the CLI's global logger from leaking between tests."""
    yield
    logging_config._global_logger = None


@pytest.fixture
def quiet_logger() -> SearchLogger:
    """A logger that records nothing to the console."""
    return SearchLogger(name="pygrep.tests", level=LogLevel.DEBUG, enable_console=False)


@pytest.fixture
def plain_config() -> SearchConfig:
    """Config with color off so output can be compared as plain text."""
    return SearchConfig(color=False, workers=4)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small tree of text files."""
    root = tmp_path / "tree"
    (root / "sub").mkdir(parents=True)
    (root / "hello.txt").write_text(HELLO_TEXT, encoding="utf-8")
    (root / "notes.txt").write_text(SAMPLE_NOTES, encoding="utf-8")
    (root / "empty.txt").write_text("", encoding="utf-8")
    (root / "nomatch.txt").write_text("nothing\nhere\n", encoding="utf-8")
    (root / "sub" / "code.py").write_text(SAMPLE_PYTHON_CODE, encoding="utf-8")
    (root / "sub" / "deep.txt").write_text("deep world\n", encoding="utf-8")
    return root


@pytest.fixture
def many_files(tmp_path: Path) -> list[Path]:
    """Twenty files that each contain exactly one match."""
    root = tmp_path / "many"
    root.mkdir()
    paths = []
    for i in range(20):
        path = root / f"file_{i:02d}.txt"
        path.write_text(f"line one\nmatch number {i}\nline three\n", encoding="utf-8")
        paths.append(path)
    return paths


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
