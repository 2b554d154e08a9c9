"""Options controlling how a document is assembled."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rustitect.markup_dialect import OutputFormat
from rustitect.tag_sections import DEFAULT_TAGS

DEFAULT_DIAGRAM_REFERENCE = "diagram.puml"


class EmbedMode(Enum):
    """How the diagram is placed in the document."""

    INLINE = "inline"
    REFERENCE = "reference"
    NONE = "none"  # document only, without the diagram


@dataclass(frozen=True)
class AssemblyOptions:
    """Document assembly settings."""

    output_format: OutputFormat = OutputFormat.ASCIIDOC
    embed: EmbedMode = EmbedMode.INLINE
    diagram_reference: str = DEFAULT_DIAGRAM_REFERENCE
    heading_level: int = 2  # level of item headings; members go one deeper
    tags: tuple[str, ...] = DEFAULT_TAGS

    def __post_init__(self) -> None:
        if not 1 <= self.heading_level <= 4:
            msg = f"heading_level must be between 1 and 4, got {self.heading_level}"
            raise ValueError(msg)

    @classmethod
    def from_config(
        cls, config: Mapping[str, Any], **overrides: Any
    ) -> "AssemblyOptions":
        """Build options from the ``document`` and ``tags`` config sections."""
        document = config.get("document") or {}
        values: dict[str, Any] = {
            "output_format": OutputFormat(
                document.get("output_format", OutputFormat.ASCIIDOC.value)
            ),
            "embed": EmbedMode(document.get("embed", EmbedMode.INLINE.value)),
            "diagram_reference": str(
                document.get("diagram_reference", DEFAULT_DIAGRAM_REFERENCE)
            ),
            "heading_level": int(document.get("heading_level", 2)),
            "tags": tuple(config.get("tags") or DEFAULT_TAGS),
        }
        values.update(overrides)
        return cls(**values)
