"""Data model for documentation attached to a declaration."""

from collections.abc import Iterable
from dataclasses import dataclass

from rustitect.tag_sections import DocSections, TagSectionParser


@dataclass(frozen=True)
class DocComment:
    """Doc comment lines with comment markers stripped."""

    lines: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Return the comment as a single string with line breaks preserved."""
        return "\n".join(self.lines)

    def sections(self, tags: Iterable[str] | None = None) -> DocSections:
        """Split the comment into a general description and tagged sections."""
        return TagSectionParser(tags).split(self.lines)

    def __add__(self, other: "DocComment") -> "DocComment":
        return DocComment(self.lines + other.lines)


EMPTY_DOC = DocComment()
