"""In-memory document store for embedding hosts and tests."""

from __future__ import annotations

from linkmender.core.errors import DocumentNotFoundError
from linkmender.core.interfaces import DocumentStorePort


class InMemoryDocumentStore(DocumentStorePort):
    """Dict-backed store. Documents and other files keep insertion order."""

    def __init__(
        self,
        documents: dict[str, str] | None = None,
        files: list[str] | None = None,
        document_extension: str = ".md",
    ) -> None:
        self.documents: dict[str, str] = dict(documents or {})
        self.files: list[str] = list(files or [])
        self.document_extension = document_extension
        self.writes: list[str] = []

    async def list_all_documents(self) -> list[str]:
        return [p for p in self.documents if p.endswith(self.document_extension)]

    async def list_all_files(self) -> list[str]:
        return list(self.documents) + [f for f in self.files if f not in self.documents]

    async def read_text(self, path: str) -> str:
        try:
            return self.documents[path]
        except KeyError:
            raise DocumentNotFoundError(path) from None

    async def write_text(self, path: str, text: str) -> None:
        self.documents[path] = text
        self.writes.append(path)
