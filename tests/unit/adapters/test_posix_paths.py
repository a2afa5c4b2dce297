"""Tests for POSIX path primitives."""

from __future__ import annotations

import pytest

from linkmender.adapters.posix_paths import PosixPathOps


class TestNormalize:
    """Tests for PosixPathOps.normalize()."""

    def test_collapses_dot_segments(self, paths: PosixPathOps) -> None:
        assert paths.normalize("a/./b/../c.md") == "a/c.md"

    def test_backslashes(self, paths: PosixPathOps) -> None:
        assert paths.normalize("a\\b\\c.md") == "a/b/c.md"

    def test_decodes_spaces(self, paths: PosixPathOps) -> None:
        assert paths.normalize("my%20note.md") == "my note.md"

    def test_root_is_empty(self, paths: PosixPathOps) -> None:
        assert paths.normalize(".") == ""
        assert paths.normalize("") == ""
        assert paths.normalize("a/..") == ""

    def test_trailing_and_duplicate_slashes(self, paths: PosixPathOps) -> None:
        assert paths.normalize("./a//b/") == "a/b"

    def test_keeps_leading_parent(self, paths: PosixPathOps) -> None:
        assert paths.normalize("../x.md") == "../x.md"

    @pytest.mark.parametrize(
        "path",
        [
            "a/./b/../c.md",
            "a\\b.md",
            "x%20y.md",
            "x%2520y.md",
            "",
            ".",
            "./a",
            "a//b/",
            "../x",
            "/abs/path.md",
        ],
    )
    def test_idempotent(self, paths: PosixPathOps, path: str) -> None:
        once = paths.normalize(path)
        assert paths.normalize(once) == once


class TestPrimitives:
    """Tests for join, relative, dirname, basename and extname."""

    def test_join_skips_empty(self, paths: PosixPathOps) -> None:
        assert paths.join("", "c.md") == "c.md"
        assert paths.join("notes", "b.md") == "notes/b.md"

    def test_join_does_not_reset_on_leading_slash(self, paths: PosixPathOps) -> None:
        assert paths.join("notes", "/x.md") == "notes//x.md"

    def test_relative(self, paths: PosixPathOps) -> None:
        assert paths.relative("notes/a.md", "archive/b.md") == "../../archive/b.md"

    def test_dirname(self, paths: PosixPathOps) -> None:
        assert paths.dirname("notes/a.md") == "notes"
        assert paths.dirname("a.md") == ""

    def test_basename(self, paths: PosixPathOps) -> None:
        assert paths.basename("notes/b.md") == "b.md"
        assert paths.basename("notes/b.md", ".md") == "b"
        assert paths.basename("notes/b.md", ".png") == "b.md"

    def test_basename_keeps_dotfile(self, paths: PosixPathOps) -> None:
        assert paths.basename(".md", ".md") == ".md"

    def test_extname(self, paths: PosixPathOps) -> None:
        assert paths.extname("a/b.tar.gz") == ".gz"
        assert paths.extname("a/b") == ""
        assert paths.extname(".bashrc") == ""
