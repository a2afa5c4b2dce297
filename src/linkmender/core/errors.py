"""Error hierarchy for linkmender."""

from __future__ import annotations


class LinkmenderError(Exception):
    """Base exception for all linkmender errors."""

    pass


class ConfigError(LinkmenderError):
    """Configuration loading or validation error."""

    pass


class DocumentNotFoundError(LinkmenderError):
    """A document named by path does not exist in the store."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document not found: {path}")
        self.path = path


class InvalidPathError(LinkmenderError):
    """A path cannot be resolved against a parent directory."""

    pass


class DocumentStoreError(LinkmenderError):
    """Document store I/O failure."""

    pass
