"""Domain models for linkmender."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LinkOccurrence(BaseModel):
    """One ``[display](target)`` construct found in a document's text."""

    model_config = ConfigDict(frozen=True)

    display_text: str = Field(description="Bracketed label, without escape markers")
    target: str = Field(description="Link path as written, unresolved")
    raw_span: str = Field(description="Exact substring matched in the source text")
    start: int = Field(ge=0, description="Offset of the first character of raw_span")
    end: int = Field(ge=0, description="Offset just past the last character of raw_span")
    escaped: bool = Field(
        default=False,
        description="Whether any delimiter was escaped; shown by `linkmender links`",
    )

    def render(self, display_text: str | None = None, target: str | None = None) -> str:
        """Rebuild the link in ``[display](target)`` form, optionally overriding parts."""
        display = self.display_text if display_text is None else display_text
        link = self.target if target is None else target
        return f"[{display}]({link})"


class PathChange(BaseModel):
    """A pending move or rename of a file, both paths canonical."""

    model_config = ConfigDict(frozen=True)

    old_path: str = Field(description="Canonical path before the move")
    new_path: str = Field(description="Canonical path after the move")


class LinkUpdate(BaseModel):
    """A link rewrite applied to a document."""

    document_path: str = Field(description="Document whose text was rewritten")
    old_link: str = Field(description="Raw span before the rewrite")
    new_link: str = Field(description="Rendered link written in its place")
    old_target: str = Field(description="Target as previously written")
    new_target: str = Field(description="Target as now written")


class BrokenLink(BaseModel):
    """A link whose resolved path does not exist in the store."""

    document_path: str = Field(description="Document containing the link")
    link: LinkOccurrence = Field(description="The offending occurrence")
    resolved_path: str = Field(description="Canonical path the link points at")
