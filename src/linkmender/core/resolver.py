"""Path resolver: converts between written link targets and canonical paths."""

from __future__ import annotations

import re

from linkmender.core.errors import InvalidPathError
from linkmender.core.interfaces import PathPort

# scheme: prefixes such as https:, mailto:, obsidian:
_EXTERNAL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")

PARENT_PREFIX = "../"


class PathResolver:
    """Resolves link targets against their owning document and back.

    Link targets are always relative to the directory that contains the
    owning document, never to the corpus root.
    """

    def __init__(self, paths: PathPort) -> None:
        self._paths = paths

    @property
    def paths(self) -> PathPort:
        """Path primitives this resolver delegates to."""
        return self._paths

    def normalize(self, path: str) -> str:
        """Canonical form of a path, as used for identity comparisons."""
        return self._paths.normalize(path)

    def resolve_link(self, target: str, owning_document_path: str) -> str:
        """Resolve a written link target to a canonical path.

        Args:
            target: Link path as written in the document.
            owning_document_path: Canonical path of the document containing the link.

        Returns:
            Canonical path the link points at.

        Raises:
            InvalidPathError: If the owning document path is empty.
        """
        owner = self._paths.normalize(owning_document_path)
        if not owner:
            raise InvalidPathError(
                f"Cannot resolve {target!r}: no owning document path ({owning_document_path!r})"
            )

        parent = self._paths.dirname(owner)
        link = self._paths.normalize(target)
        return self._paths.normalize(self._paths.join(parent, link))

    def relative_link(self, from_document_path: str, to_path: str) -> str:
        """Shortest link from a document to a path, in link form.

        The relative path is taken from the document path itself and one
        leading ``../`` is then dropped, so ``notes/a.md`` linking to
        ``archive/b.md`` yields ``../archive/b.md`` and a sibling yields
        just its file name.

        Raises:
            InvalidPathError: If either path is empty.
        """
        source = self._paths.normalize(from_document_path)
        destination = self._paths.normalize(to_path)
        if not source or not destination:
            raise InvalidPathError(
                f"Cannot link from {from_document_path!r} to {to_path!r}: empty path"
            )

        if source == destination:
            return self.to_link_form(self._paths.basename(destination))

        link = self.to_link_form(self._paths.relative(source, destination))
        if link.startswith(PARENT_PREFIX):
            link = link[len(PARENT_PREFIX) :]
        return link

    def with_renamed_file_name(self, file_path: str, new_base_name: str) -> str:
        """Replace the file name of a path, keeping its directory and extension."""
        file_path = self._paths.normalize(file_path)
        directory = self._paths.dirname(file_path)
        extension = self._paths.extname(file_path)
        return self._paths.normalize(self._paths.join(directory, new_base_name + extension))

    def display_name(self, link: str) -> str:
        """Base name of a link target without its extension, in file form."""
        extension = self._paths.extname(link)
        return self._paths.normalize(self._paths.basename(link, extension))

    @staticmethod
    def to_link_form(path: str) -> str:
        """Convert a path for use inside a link: forward slashes, spaces as %20."""
        return path.replace("\\", "/").replace(" ", "%20")

    @staticmethod
    def split_fragment(target: str) -> tuple[str, str]:
        """Split ``path#fragment`` into its path and ``#fragment`` suffix."""
        index = target.find("#")
        if index == -1:
            return target, ""
        return target[:index], target[index:]

    @staticmethod
    def is_external(target: str) -> bool:
        """Whether a target points outside the corpus or only within the page."""
        stripped = target.strip()
        return not stripped or stripped.startswith("#") or bool(_EXTERNAL_PATTERN.match(stripped))
