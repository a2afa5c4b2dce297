"""POSIX path primitives for corpus-relative canonical paths."""

from __future__ import annotations

import posixpath

from linkmender.core.interfaces import PathPort

_ENCODED_SPACE = "%20"


class PosixPathOps(PathPort):
    """Path primitives using forward slashes regardless of host platform.

    Canonical paths are corpus-relative: backslashes become ``/``, ``%20``
    becomes a space and ``.``/``..`` segments are collapsed. The corpus
    root itself is the empty string.
    """

    def normalize(self, path: str) -> str:
        """Canonical form of path; idempotent."""
        path = path.replace("\\", "/")
        while _ENCODED_SPACE in path:
            path = path.replace(_ENCODED_SPACE, " ")
        if not path:
            return ""
        path = posixpath.normpath(path)
        return "" if path == "." else path

    def join(self, *parts: str) -> str:
        """Concatenate non-empty segments; a leading ``/`` does not reset the join."""
        return "/".join(part for part in parts if part)

    def relative(self, start: str, path: str) -> str:
        return posixpath.relpath(path, start)

    def dirname(self, path: str) -> str:
        return posixpath.dirname(path)

    def basename(self, path: str, ext: str = "") -> str:
        name = posixpath.basename(path)
        if ext and name.endswith(ext) and name != ext:
            name = name[: -len(ext)]
        return name

    def extname(self, path: str) -> str:
        return posixpath.splitext(path)[1]
