"""CLI entry point for linkmender."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

import click

from linkmender import __version__
from linkmender.core.errors import LinkmenderError

if TYPE_CHECKING:
    from linkmender.container import Container

_config_option = click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Path to config file (default: ~/.linkmender/config.yaml)",
)
_root_option = click.option(
    "--root",
    default=None,
    help="Corpus directory (overrides config)",
)
_verbose_option = click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)


@click.group()
@click.version_option(version=__version__, prog_name="linkmender")
def main() -> None:
    """Linkmender: keep markdown links intact when files move."""
    pass


@main.command()
@click.argument("document")
@_config_option
@_root_option
@_verbose_option
def links(document: str, config_path: str | None, root: str | None, verbose: bool) -> None:
    """List the links found in DOCUMENT."""
    _setup_logging(verbose)
    container = _load_container(config_path, root)
    resolver = container.resolver

    try:
        occurrences = asyncio.run(container.rewriter.find_links_in_document(document))
        for occurrence in occurrences:
            line = f"  [{occurrence.display_text}] {occurrence.target}"
            if resolver.is_external(occurrence.target):
                line += " (external)"
            else:
                link_path, _ = resolver.split_fragment(occurrence.target)
                line += f" -> {resolver.resolve_link(link_path, document)}"
            if occurrence.escaped:
                line += " (escaped)"
            click.echo(line)
    except LinkmenderError as e:
        click.echo(f"Cannot list links: {e}", err=True)
        sys.exit(1)
    click.echo(f"{len(occurrences)} link(s) in {document}")


@main.command()
@click.argument("path")
@_config_option
@_root_option
@_verbose_option
def backlinks(path: str, config_path: str | None, root: str | None, verbose: bool) -> None:
    """List the documents that link to PATH."""
    _setup_logging(verbose)
    container = _load_container(config_path, root)

    try:
        documents = asyncio.run(container.rewriter.find_documents_linking_to(path))
    except LinkmenderError as e:
        click.echo(f"Cannot list backlinks: {e}", err=True)
        sys.exit(1)
    for document in documents:
        click.echo(f"  {document}")
    click.echo(f"{len(documents)} document(s) link to {path}")


@main.command()
@click.argument("document", required=False)
@_config_option
@_root_option
@_verbose_option
def check(
    document: str | None,
    config_path: str | None,
    root: str | None,
    verbose: bool,
) -> None:
    """Report links that point at missing files (all documents by default)."""
    _setup_logging(verbose)
    container = _load_container(config_path, root)
    rewriter = container.rewriter

    try:
        if document:
            broken = asyncio.run(rewriter.find_broken_links(document))
        else:
            broken = asyncio.run(rewriter.find_all_broken_links())
    except LinkmenderError as e:
        click.echo(f"Check failed: {e}", err=True)
        sys.exit(1)

    for item in broken:
        click.echo(f"  {item.document_path}: {item.link.raw_span} -> {item.resolved_path}")

    if broken:
        click.echo(f"{len(broken)} broken link(s)", err=True)
        sys.exit(1)
    click.echo("No broken links.")


@main.command()
@click.argument("old_path")
@click.argument("new_path")
@click.option(
    "--rewrite-display-text/--keep-display-text",
    default=None,
    help="Replace display text with the new file name (default: from config)",
)
@_config_option
@_root_option
@_verbose_option
def moved(
    old_path: str,
    new_path: str,
    rewrite_display_text: bool | None,
    config_path: str | None,
    root: str | None,
    verbose: bool,
) -> None:
    """Update links after OLD_PATH was moved to NEW_PATH."""
    _setup_logging(verbose)
    container = _load_container(config_path, root)
    if rewrite_display_text is None:
        rewrite_display_text = container.config.rewrite_display_text

    async def _run() -> int:
        rewriter = container.rewriter
        count = 0
        if new_path.endswith(container.config.document_extension):
            count += len(await rewriter.update_links_in_moved_document(new_path, old_path))
        count += len(
            await rewriter.update_links_to_moved_file(old_path, new_path, rewrite_display_text)
        )
        return count

    try:
        count = asyncio.run(_run())
    except Exception as e:
        click.echo(f"Update failed: {e}", err=True)
        sys.exit(1)
    click.echo(f"Updated {count} link(s).")


def _load_container(config_path: str | None, root: str | None) -> Container:
    """Load config and build the default container, exiting on config errors."""
    from linkmender.config import load_config
    from linkmender.container import Container

    try:
        config = load_config(config_path, root=root)
    except Exception as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    return Container.create_default(config)


def _setup_logging(verbose: bool) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
