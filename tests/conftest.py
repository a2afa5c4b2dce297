"""Shared test fixtures for linkmender."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkmender.adapters.posix_paths import PosixPathOps
from linkmender.config import LinkmenderConfig
from linkmender.core.resolver import PathResolver


@pytest.fixture()
def paths() -> PosixPathOps:
    """Real POSIX path primitives (pure, no I/O)."""
    return PosixPathOps()


@pytest.fixture()
def resolver(paths: PosixPathOps) -> PathResolver:
    """Path resolver over POSIX primitives."""
    return PathResolver(paths)


@pytest.fixture()
def test_config(tmp_path: Path) -> LinkmenderConfig:
    """Create a test config pointing to a temp corpus."""
    corpus = tmp_path / "corpus"
    corpus.mkdir()
    return LinkmenderConfig(root=str(corpus))
