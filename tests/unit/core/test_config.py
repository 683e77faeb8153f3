"""Tests for pygrep.core.config module."""

from __future__ import annotations

import os

import pytest

from pygrep.core.config import DEFAULT_MAX_CONCURRENT_FILES, SearchConfig
from pygrep.utils.error_handling import ConfigurationError


class TestSearchConfig:
    def test_defaults(self):
        cfg = SearchConfig()
        assert cfg.workers == 0
        assert cfg.max_concurrent_files == DEFAULT_MAX_CONCURRENT_FILES == 8
        assert cfg.encoding == "utf-8"
        assert cfg.color is True
        cfg.validate()

    def test_resolve_workers_auto(self):
        assert SearchConfig().resolve_workers() == (os.cpu_count() or 4)

    def test_resolve_workers_explicit(self):
        assert SearchConfig(workers=3).resolve_workers() == 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": -1},
            {"max_concurrent_files": 0},
            {"read_chunk_size": 0},
            {"encoding": "no-such-codec"},
        ],
    )
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ConfigurationError):
            SearchConfig(**kwargs).validate()
