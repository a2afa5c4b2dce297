"""Port interfaces for linkmender (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class DocumentStorePort(ABC):
    """Port for the host document store that owns the corpus."""

    @abstractmethod
    async def list_all_documents(self) -> list[str]:
        """List every text document of the tracked kind.

        Returns:
            Canonical document paths in store enumeration order.
        """

    @abstractmethod
    async def list_all_files(self) -> list[str]:
        """List every file in the corpus, of any kind.

        Returns:
            Canonical file paths in store enumeration order.
        """

    @abstractmethod
    async def read_text(self, path: str) -> str:
        """Read the full text of a document.

        Args:
            path: Canonical document path.

        Returns:
            The document text.

        Raises:
            DocumentNotFoundError: If no document exists at path.
        """

    @abstractmethod
    async def write_text(self, path: str, text: str) -> None:
        """Replace the full text of a document.

        Args:
            path: Canonical document path.
            text: New document text.
        """


class PathPort(ABC):
    """Port for path primitives with the host's filesystem semantics."""

    @abstractmethod
    def normalize(self, path: str) -> str:
        """Normalize a path to its canonical form. Must be idempotent."""

    @abstractmethod
    def join(self, *parts: str) -> str:
        """Join path segments."""

    @abstractmethod
    def relative(self, start: str, path: str) -> str:
        """Relative path leading from start to path."""

    @abstractmethod
    def dirname(self, path: str) -> str:
        """Directory portion of a path."""

    @abstractmethod
    def basename(self, path: str, ext: str = "") -> str:
        """Final path segment, with ext removed when it is a suffix."""

    @abstractmethod
    def extname(self, path: str) -> str:
        """Extension of the final path segment, including the leading dot."""
