"""Tests for the path resolver."""

from __future__ import annotations

import pytest

from linkmender.core.errors import InvalidPathError
from linkmender.core.resolver import PathResolver


class TestResolveLink:
    """Tests for PathResolver.resolve_link()."""

    def test_sibling(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("b.md", "notes/a.md") == "notes/b.md"

    def test_parent_directory(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("../archive/b.md", "notes/a.md") == "archive/b.md"

    def test_document_at_root(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("c.md", "a.md") == "c.md"

    def test_current_directory_prefix(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("./b.md", "notes/a.md") == "notes/b.md"

    def test_encoded_spaces(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("my%20note.md", "a.md") == "my note.md"

    def test_backslashes(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("sub\\x.md", "notes/a.md") == "notes/sub/x.md"

    def test_leading_slash_is_still_relative(self, resolver: PathResolver) -> None:
        assert resolver.resolve_link("/x.md", "notes/a.md") == "notes/x.md"

    def test_empty_owner_raises(self, resolver: PathResolver) -> None:
        with pytest.raises(InvalidPathError, match="no owning document"):
            resolver.resolve_link("b.md", "")


class TestRelativeLink:
    """Tests for PathResolver.relative_link()."""

    def test_across_one_level(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("notes/a.md", "archive/b.md") == "../archive/b.md"

    def test_sibling(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("notes/a.md", "notes/b.md") == "b.md"

    def test_root_siblings(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("a.md", "c.md") == "c.md"

    def test_into_subdirectory(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("notes/a.md", "notes/sub/x.md") == "sub/x.md"

    def test_up_two_levels(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("notes/deep/a.md", "b.md") == "../../b.md"

    def test_spaces_are_encoded(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("a.md", "notes/my note.md") == "notes/my%20note.md"

    def test_link_to_itself(self, resolver: PathResolver) -> None:
        assert resolver.relative_link("notes/a.md", "notes/a.md") == "a.md"

    def test_empty_path_raises(self, resolver: PathResolver) -> None:
        with pytest.raises(InvalidPathError):
            resolver.relative_link("notes/a.md", "")

    @pytest.mark.parametrize(
        ("document", "target"),
        [
            ("notes/a.md", "archive/b.md"),
            ("notes/a.md", "notes/b.md"),
            ("a.md", "c.md"),
            ("a.md", "x/y/z.png"),
            ("x/y/z/a.md", "b.md"),
            ("x/y/a.md", "x/q/r/b.md"),
            ("notes/a.md", "notes/a.md"),
            ("my docs/a.md", "other docs/b c.md"),
        ],
    )
    def test_round_trip(self, resolver: PathResolver, document: str, target: str) -> None:
        link = resolver.relative_link(document, target)
        assert resolver.resolve_link(link, document) == resolver.normalize(target)


class TestRenamedFileName:
    """Tests for PathResolver.with_renamed_file_name()."""

    def test_keeps_directory_and_extension(self, resolver: PathResolver) -> None:
        assert resolver.with_renamed_file_name("notes/old.md", "new") == "notes/new.md"

    def test_root_file(self, resolver: PathResolver) -> None:
        assert resolver.with_renamed_file_name("old.md", "new") == "new.md"

    def test_no_extension(self, resolver: PathResolver) -> None:
        assert resolver.with_renamed_file_name("notes/README", "INDEX") == "notes/INDEX"

    def test_result_is_normalized(self, resolver: PathResolver) -> None:
        assert resolver.with_renamed_file_name("a\\b\\old.png", "new%20pic") == "a/b/new pic.png"


class TestLinkHelpers:
    """Tests for fragment, external and display-name helpers."""

    def test_display_name(self, resolver: PathResolver) -> None:
        assert resolver.display_name("../archive/My%20Note.md") == "My Note"

    def test_split_fragment(self) -> None:
        assert PathResolver.split_fragment("b.md#Intro") == ("b.md", "#Intro")
        assert PathResolver.split_fragment("b.md") == ("b.md", "")

    @pytest.mark.parametrize(
        "target", ["https://example.com/b.md", "mailto:me@example.com", "#top", "", "  "]
    )
    def test_external_targets(self, target: str) -> None:
        assert PathResolver.is_external(target)

    @pytest.mark.parametrize("target", ["b.md", "../b.md", "sub/c.png", "b.md#Intro"])
    def test_local_targets(self, target: str) -> None:
        assert not PathResolver.is_external(target)

    def test_to_link_form(self) -> None:
        assert PathResolver.to_link_form("a\\my note.md") == "a/my%20note.md"
