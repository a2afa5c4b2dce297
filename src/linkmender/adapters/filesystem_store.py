"""Filesystem-backed document store rooted at a corpus directory.

Paths exchanged with the engine are corpus-relative and use forward
slashes. Hidden files and directories (``.git``, ``.obsidian``, ...) are
not part of the corpus. Text is read and written as raw UTF-8 bytes so
line endings survive a rewrite unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from linkmender.core.errors import DocumentNotFoundError, DocumentStoreError
from linkmender.core.interfaces import DocumentStorePort

logger = logging.getLogger(__name__)


class FilesystemDocumentStore(DocumentStorePort):
    """Document store over a directory tree, implementing DocumentStorePort."""

    def __init__(self, root: str | Path, document_extension: str = ".md") -> None:
        self.root = Path(root).expanduser().resolve()
        self.document_extension = document_extension

    async def list_all_documents(self) -> list[str]:
        """List documents with the tracked extension, sorted by path."""
        files = await self.list_all_files()
        return [f for f in files if f.endswith(self.document_extension)]

    async def list_all_files(self) -> list[str]:
        """List every non-hidden file under the root, sorted by path."""
        return await asyncio.to_thread(self._walk)

    async def read_text(self, path: str) -> str:
        """Read a document's text."""
        return await asyncio.to_thread(self._read, path)

    async def write_text(self, path: str, text: str) -> None:
        """Overwrite a document's text."""
        await asyncio.to_thread(self._write, path, text)

    def _walk(self) -> list[str]:
        if not self.root.is_dir():
            raise DocumentStoreError(f"Corpus root is not a directory: {self.root}")

        files = []
        for file_path in self.root.rglob("*"):
            relative = file_path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if file_path.is_file():
                files.append(relative.as_posix())
        return sorted(files)

    def _locate(self, path: str) -> Path:
        """Map a corpus path to a filesystem path inside the root."""
        full_path = (self.root / path).resolve()
        if not full_path.is_relative_to(self.root):
            raise DocumentStoreError(f"Path escapes corpus root: {path}")
        return full_path

    def _read(self, path: str) -> str:
        full_path = self._locate(path)
        if not full_path.is_file():
            raise DocumentNotFoundError(path)
        try:
            return full_path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentStoreError(f"Cannot read {path}: {e}") from e

    def _write(self, path: str, text: str) -> None:
        full_path = self._locate(path)
        try:
            full_path.write_bytes(text.encode("utf-8"))
        except OSError as e:
            raise DocumentStoreError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote %d characters to %s", len(text), path)
