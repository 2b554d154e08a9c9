"""Line classifier that splits doc comments into description and tagged sections.

The classifier is a small state machine. It starts in the description state;
a heading line (``# Arguments``) naming a recognized tag switches to that
tag's body state, and every other line is appended to the body of the current
state. Lines inside code fences are never transitions, so ``# use foo;``
hidden example lines stay where they are.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

DEFAULT_TAGS = (
    "Arguments",
    "Example",
    "Examples",
    "Returns",
    "Errors",
    "Panics",
    "Safety",
)

TAG_LINE_RE = re.compile(r"^\s{0,3}#{1,6}\s+(?P<title>[^#\s].*?)\s*#*\s*$")
FENCE_RE = re.compile(r"^\s*(```|~~~)")


class LineKind(Enum):
    """Classification of a single doc comment line."""

    TEXT = "text"
    FENCE = "fence"
    TAG = "tag"


@dataclass(frozen=True)
class DocSections:
    """General description plus tagged sections in first-appearance order."""

    description: tuple[str, ...]
    sections: tuple[tuple[str, tuple[str, ...]], ...] = ()


class TagSectionParser:
    """Splits doc comment lines into a DocSections value."""

    def __init__(self, tags: Iterable[str] | None = None) -> None:
        """Initialize the parser with the recognized tag names."""
        names = DEFAULT_TAGS if tags is None else tags
        self.tags = {t.lower() for t in names}

    def classify(self, line: str, *, in_fence: bool) -> tuple[LineKind, str | None]:
        """Classify a line, returning the tag title for TAG lines."""
        if FENCE_RE.match(line):
            return LineKind.FENCE, None
        if in_fence:
            return LineKind.TEXT, None
        m = TAG_LINE_RE.match(line)
        if m and m.group("title").lower() in self.tags:
            return LineKind.TAG, m.group("title")
        return LineKind.TEXT, None

    def split(self, lines: Iterable[str]) -> DocSections:
        """Run the classifier over the lines of a doc comment."""
        description: list[str] = []
        bodies: dict[str, list[str]] = {}
        titles: dict[str, str] = {}
        state: str | None = None  # None is the description state
        in_fence = False

        for line in lines:
            kind, title = self.classify(line, in_fence=in_fence)
            if kind is LineKind.TAG and title is not None:
                key = title.lower()
                titles.setdefault(key, title)
                bodies.setdefault(key, [])
                state = key
                continue
            if kind is LineKind.FENCE:
                in_fence = not in_fence
            if state is None:
                description.append(line)
            else:
                bodies[state].append(line)

        return DocSections(
            description=_trim_blank(description),
            sections=tuple((titles[k], _trim_blank(v)) for k, v in bodies.items()),
        )


def _trim_blank(lines: list[str]) -> tuple[str, ...]:
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return tuple(lines[start:end])
