"""Rewrite engine: keeps links pointing at files that moved.

Documents are processed strictly one at a time: read, scan, rewrite,
write. Each read and write is an await on the document store, but no
two documents are ever open together. A failure in one document is
logged and never stops a batch operation over the others, so a batch
may leave the corpus partially updated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from linkmender.core.errors import DocumentNotFoundError, LinkmenderError
from linkmender.core.interfaces import DocumentStorePort
from linkmender.core.models import BrokenLink, LinkOccurrence, LinkUpdate, PathChange
from linkmender.core.resolver import PathResolver
from linkmender.core.scanner import scan_links

logger = logging.getLogger(__name__)


class LinkRewriter:
    """Finds and rewrites links across the documents of a store."""

    def __init__(
        self,
        store: DocumentStorePort,
        resolver: PathResolver,
        document_extension: str = ".md",
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._document_extension = document_extension

    async def apply_path_change(
        self,
        document_path: str,
        old_path: str,
        new_path: str,
        rewrite_display_text: bool = False,
    ) -> list[LinkUpdate]:
        """Apply a single move to the links of one document."""
        change = PathChange(old_path=old_path, new_path=new_path)
        return await self.apply_path_changes(document_path, [change], rewrite_display_text)

    async def apply_path_changes(
        self,
        document_path: str,
        changes: Iterable[PathChange],
        rewrite_display_text: bool = False,
    ) -> list[LinkUpdate]:
        """Rewrite the links of one document that point at moved files.

        A link matches a change when it resolves to the change's old path;
        it is then rewritten relative to the document so that it resolves
        to the new path. Each link matches at most one change, the first
        in order. The document is written back once, and only when at
        least one link changed.

        Args:
            document_path: Canonical path of the document to update.
            changes: Moves to apply.
            rewrite_display_text: Replace the display text with the new
                file's base name when the new target is a document.

        Returns:
            The updates applied, empty if the document was left untouched
            or does not exist.
        """
        text = await self._read(document_path)
        if text is None:
            return []

        pending = [
            (self._resolver.normalize(c.old_path), self._resolver.normalize(c.new_path))
            for c in changes
        ]

        updates: list[tuple[LinkOccurrence, LinkUpdate]] = []
        for occurrence in scan_links(text):
            resolved = self._resolve(occurrence, document_path)
            if resolved is None:
                continue

            for old_path, new_path in pending:
                if resolved != old_path:
                    continue
                update = self._rebuild(occurrence, document_path, new_path, rewrite_display_text)
                if update is not None:
                    updates.append((occurrence, update))
                break

        return await self._commit(document_path, text, updates)

    async def find_links_in_document(self, document_path: str) -> list[LinkOccurrence]:
        """All link occurrences in a document, or an empty list if it is missing."""
        text = await self._read(document_path)
        if text is None:
            return []
        return list(scan_links(text))

    async def find_documents_linking_to(self, target_path: str) -> list[str]:
        """Documents containing at least one link that resolves to target_path.

        Every document is read on every call. Results follow store
        enumeration order without duplicates.
        """
        target = self._resolver.normalize(target_path)
        found: dict[str, None] = {}

        for document_path in await self._store.list_all_documents():
            try:
                links = await self.find_links_in_document(document_path)
                for occurrence in links:
                    if self._resolve(occurrence, document_path) == target:
                        found[document_path] = None
                        break
            except LinkmenderError as e:
                logger.warning(
                    "Skipping %s while looking for links to %s: %s", document_path, target, e
                )

        return list(found)

    async def apply_path_changes_to_all(
        self,
        changes: Iterable[PathChange],
        rewrite_display_text: bool = False,
    ) -> list[LinkUpdate]:
        """Apply moves to every document in the store, one document at a time."""
        changes = list(changes)
        updates: list[LinkUpdate] = []
        for document_path in await self._store.list_all_documents():
            updates.extend(await self._isolated(document_path, changes, rewrite_display_text))
        return updates

    async def update_links_to_moved_file(
        self,
        old_path: str,
        new_path: str,
        rewrite_display_text: bool = False,
    ) -> list[LinkUpdate]:
        """Rewrite every link in the corpus that still points at old_path."""
        changes = [PathChange(old_path=old_path, new_path=new_path)]
        updates: list[LinkUpdate] = []
        for document_path in await self.find_documents_linking_to(old_path):
            updates.extend(await self._isolated(document_path, changes, rewrite_display_text))

        logger.info(
            "Updated %d link(s) to %s -> %s",
            len(updates),
            old_path,
            new_path,
        )
        return updates

    async def update_links_in_moved_document(
        self,
        new_document_path: str,
        old_document_path: str,
    ) -> list[LinkUpdate]:
        """Fix the relative links of a document that itself moved.

        Each link is resolved against the document's old location. Links
        that no longer reach the same file from the new location are
        rewritten; links to the document itself follow it.
        """
        text = await self._read(new_document_path)
        if text is None:
            return []

        old_location = self._resolver.normalize(old_document_path)
        new_location = self._resolver.normalize(new_document_path)

        updates: list[tuple[LinkOccurrence, LinkUpdate]] = []
        for occurrence in scan_links(text):
            intended = self._resolve(occurrence, old_location)
            if intended is None:
                continue
            if intended == old_location:
                intended = new_location
            if self._resolve(occurrence, new_location) == intended:
                continue

            update = self._rebuild(occurrence, new_location, intended, rewrite_display_text=False)
            if update is not None:
                updates.append((occurrence, update))

        return await self._commit(new_document_path, text, updates)

    async def find_file(self, path: str) -> str | None:
        """The store's path for a file, compared in canonical form."""
        wanted = self._resolver.normalize(path)
        for file_path in await self._store.list_all_files():
            if self._resolver.normalize(file_path) == wanted:
                return file_path
        return None

    async def find_broken_links(self, document_path: str) -> list[BrokenLink]:
        """Links in a document whose resolved path is not a file in the store."""
        existing = {self._resolver.normalize(f) for f in await self._store.list_all_files()}
        broken = []
        for occurrence in await self.find_links_in_document(document_path):
            resolved = self._resolve(occurrence, document_path)
            if resolved is not None and resolved not in existing:
                broken.append(
                    BrokenLink(document_path=document_path, link=occurrence, resolved_path=resolved)
                )
        return broken

    async def find_all_broken_links(self) -> list[BrokenLink]:
        """Broken links across every document in the store."""
        broken: list[BrokenLink] = []
        for document_path in await self._store.list_all_documents():
            try:
                broken.extend(await self.find_broken_links(document_path))
            except LinkmenderError as e:
                logger.warning("Skipping %s while checking links: %s", document_path, e)
        return broken

    def _resolve(self, occurrence: LinkOccurrence, document_path: str) -> str | None:
        """Canonical path of a link, or None for external and in-page links."""
        if self._resolver.is_external(occurrence.target):
            return None
        link_path, _ = self._resolver.split_fragment(occurrence.target)
        return self._resolver.resolve_link(link_path, document_path)

    def _rebuild(
        self,
        occurrence: LinkOccurrence,
        document_path: str,
        new_path: str,
        rewrite_display_text: bool,
    ) -> LinkUpdate | None:
        """Render occurrence re-targeted at new_path; None if nothing would change."""
        _, fragment = self._resolver.split_fragment(occurrence.target)
        new_link_path = self._resolver.relative_link(document_path, new_path)

        display_text = occurrence.display_text
        if rewrite_display_text and new_link_path.endswith(self._document_extension):
            display_text = self._resolver.display_name(new_link_path)

        new_target = new_link_path + fragment
        rendered = occurrence.render(display_text=display_text, target=new_target)
        if rendered == occurrence.raw_span:
            return None

        return LinkUpdate(
            document_path=document_path,
            old_link=occurrence.raw_span,
            new_link=rendered,
            old_target=occurrence.target,
            new_target=new_target,
        )

    async def _commit(
        self,
        document_path: str,
        text: str,
        updates: list[tuple[LinkOccurrence, LinkUpdate]],
    ) -> list[LinkUpdate]:
        """Splice updates into text by offset and write it back once."""
        if not updates:
            logger.debug("No links to update in %s", document_path)
            return []

        for occurrence, update in sorted(updates, key=lambda u: u[0].start, reverse=True):
            text = text[: occurrence.start] + update.new_link + text[occurrence.end :]

        await self._store.write_text(document_path, text)

        for _, update in updates:
            logger.info(
                "Link updated in %s: %s -> %s",
                document_path,
                update.old_target,
                update.new_target,
            )
        return [update for _, update in updates]

    async def _isolated(
        self,
        document_path: str,
        changes: list[PathChange],
        rewrite_display_text: bool,
    ) -> list[LinkUpdate]:
        try:
            return await self.apply_path_changes(document_path, changes, rewrite_display_text)
        except LinkmenderError as e:
            logger.warning("Skipping %s: %s", document_path, e)
            return []

    async def _read(self, document_path: str) -> str | None:
        try:
            return await self._store.read_text(document_path)
        except DocumentNotFoundError:
            logger.error("Cannot process links, document not found: %s", document_path)
            return None
