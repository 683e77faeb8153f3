"""Tests for pygrep.utils.helpers module."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pygrep.core.types import CandidatePath
from pygrep.utils.error_handling import GlobError
from pygrep.utils.helpers import expand_glob, is_regular_file, validate_glob


class TestValidateGlob:
    @pytest.mark.parametrize(
        "pattern",
        [
            "*.py",
            "src/**/*.py",
            "**/*.txt",
            "**",
            "file?.txt",
            "[abc].txt",
            "[!abc].txt",
            "[]].txt",
            "a/[a-z]*/b",
        ],
    )
    def test_valid(self, pattern):
        validate_glob(pattern)

    @pytest.mark.parametrize(
        "pattern",
        [
            "",
            "src/[abc",
            "[",
            "a**",
            "**a/b",
            "src/a**/b",
            "***",
            "src/***/x",
        ],
    )
    def test_invalid(self, pattern):
        with pytest.raises(GlobError):
            validate_glob(pattern)

    def test_error_carries_position(self):
        with pytest.raises(GlobError) as exc_info:
            validate_glob("ab[cd")
        assert exc_info.value.position == 2


class TestExpandGlob:
    def test_flat(self, sample_tree: Path):
        candidates = expand_glob(str(sample_tree / "*.txt"))
        names = [c.path.name for c in candidates]
        assert names == ["empty.txt", "hello.txt", "nomatch.txt", "notes.txt"]
        assert all(c.ok for c in candidates)

    def test_recursive(self, sample_tree: Path):
        candidates = expand_glob(str(sample_tree / "**" / "*.txt"))
        names = {c.path.name for c in candidates}
        assert "deep.txt" in names
        assert "hello.txt" in names

    def test_no_matches(self, tmp_path: Path):
        assert expand_glob(str(tmp_path / "*.nothing")) == []

    def test_hidden_files_included(self, tmp_path: Path):
        (tmp_path / ".hidden.txt").write_text("x", encoding="utf-8")
        candidates = expand_glob(str(tmp_path / "*.txt"))
        assert [c.path.name for c in candidates] == [".hidden.txt"]

    def test_malformed_raises(self, tmp_path: Path):
        with pytest.raises(GlobError):
            expand_glob(str(tmp_path / "[abc"))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_broken_symlink_is_resolution_error(self, tmp_path: Path):
        (tmp_path / "good.txt").write_text("x", encoding="utf-8")
        (tmp_path / "broken.txt").symlink_to(tmp_path / "missing-target")
        candidates = expand_glob(str(tmp_path / "*.txt"))
        assert len(candidates) == 2
        broken = [c for c in candidates if not c.ok]
        assert len(broken) == 1
        assert broken[0].error is not None
        assert broken[0].error.file_path.name == "broken.txt"


class TestIsRegularFile:
    def test_file_and_dir(self, sample_tree: Path):
        assert is_regular_file(CandidatePath(path=sample_tree / "hello.txt"))
        assert not is_regular_file(CandidatePath(path=sample_tree / "sub"))

    def test_unresolved(self):
        assert not is_regular_file(CandidatePath())
