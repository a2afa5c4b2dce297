"""Dependency injection container for linkmender."""

from __future__ import annotations

from dataclasses import dataclass

from linkmender.config import LinkmenderConfig
from linkmender.core.interfaces import DocumentStorePort, PathPort
from linkmender.core.resolver import PathResolver
from linkmender.rewriter import LinkRewriter


@dataclass
class Container:
    """DI container holding all ports and services."""

    config: LinkmenderConfig
    store: DocumentStorePort
    paths: PathPort
    resolver: PathResolver
    rewriter: LinkRewriter

    @staticmethod
    def create_default(config: LinkmenderConfig) -> Container:
        """Create a container with production adapters."""
        from linkmender.adapters.filesystem_store import FilesystemDocumentStore
        from linkmender.adapters.posix_paths import PosixPathOps

        store = FilesystemDocumentStore(
            config.root_path,
            document_extension=config.document_extension,
        )
        paths = PosixPathOps()
        return Container._assemble(config, store, paths)

    @staticmethod
    def create_for_testing(
        config: LinkmenderConfig | None = None,
        store: DocumentStorePort | None = None,
        paths: PathPort | None = None,
    ) -> Container:
        """Create a container with test/mock adapters.

        All parameters are optional. Provide mocks for the components
        you want to control in tests; path primitives default to the real
        POSIX implementation since they have no side effects.
        """
        from linkmender.adapters.posix_paths import PosixPathOps

        if config is None:
            config = LinkmenderConfig(root="/tmp/test/corpus")

        # Use a stub that raises if accidentally called without being mocked
        class StubDocumentStore(DocumentStorePort):
            async def list_all_documents(self) -> list[str]:
                raise NotImplementedError("Provide a mock store")

            async def list_all_files(self) -> list[str]:
                raise NotImplementedError("Provide a mock store")

            async def read_text(self, path: str) -> str:
                raise NotImplementedError("Provide a mock store")

            async def write_text(self, path: str, text: str) -> None:
                raise NotImplementedError("Provide a mock store")

        return Container._assemble(config, store or StubDocumentStore(), paths or PosixPathOps())

    @staticmethod
    def _assemble(config: LinkmenderConfig, store: DocumentStorePort, paths: PathPort) -> Container:
        resolver = PathResolver(paths)
        rewriter = LinkRewriter(store, resolver, document_extension=config.document_extension)
        return Container(
            config=config,
            store=store,
            paths=paths,
            resolver=resolver,
            rewriter=rewriter,
        )
