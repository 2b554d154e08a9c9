"""Document markup dialects: headings, diagram embeds and rustdoc text."""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum
from pathlib import PurePosixPath

from rustitect.code_block import adoc_codeblock, md_codeblock

FENCE_OPEN_RE = re.compile(r"^\s*(?P<marker>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")

# Fence attributes rustdoc accepts on Rust examples.
RUSTDOC_ATTRIBUTES = frozenset(
    {
        "rust",
        "ignore",
        "no_run",
        "should_panic",
        "compile_fail",
        "test_harness",
        "standalone_crate",
        "edition2015",
        "edition2018",
        "edition2021",
        "edition2024",
    }
)


class OutputFormat(Enum):
    """Markup dialect of the assembled document."""

    ASCIIDOC = "asciidoc"
    MARKDOWN = "markdown"


class MarkupDialect(ABC):
    """Base class with the dialect-independent text conversion."""

    extension: str

    @abstractmethod
    def heading(self, level: int, title: str) -> str:
        """Return a section heading."""

    @abstractmethod
    def inline_embed(self, diagram: str) -> str:
        """Return a block holding the diagram markup."""

    @abstractmethod
    def reference_embed(self, reference: str) -> str:
        """Return a directive pointing at a diagram file."""

    @abstractmethod
    def code_block(self, lang: str, code: str) -> str:
        """Return a code listing."""

    @abstractmethod
    def escape_line(self, line: str) -> str:
        """Escape a body line the dialect would read as structure."""

    def render_text(self, lines: Iterable[str]) -> str:
        """Convert rustdoc Markdown lines into the dialect.

        Code fences become dialect code blocks; an unterminated fence runs to
        the end of the text.
        """
        out: list[str] = []
        marker: str | None = None
        lang = ""
        code: list[str] = []

        for line in lines:
            if marker is None:
                m = FENCE_OPEN_RE.match(line)
                if m:
                    marker = m.group("marker")
                    lang = fence_language(m.group("info"))
                    code = []
                else:
                    out.append(self.escape_line(line))
                continue
            stripped = line.strip()
            if stripped.startswith(marker) and not stripped.strip(marker[0]):
                out.append(self.code_block(lang, _code_text(lang, code)))
                marker = None
            else:
                code.append(line)

        if marker is not None:
            out.append(self.code_block(lang, _code_text(lang, code)))
        return "\n".join(out)


class AsciiDocDialect(MarkupDialect):
    """Asciidoctor output with PlantUML diagram blocks."""

    extension = ".adoc"
    heading_re = re.compile(r"^\s{0,3}(=+|#+)\s")
    # Delimiters that open a listing, example, sidebar, quote, comment,
    # literal or passthrough block, and table boundaries.
    delimiter_re = re.compile(
        r"^(-{4,}|={4,}|\*{4,}|_{4,}|/{4,}|\.{4,}|\+{4,}|\|===)\s*$"
    )

    def heading(self, level: int, title: str) -> str:
        return f"{'=' * level} {title}"

    def inline_embed(self, diagram: str) -> str:
        return f"[plantuml]\n----\n{diagram}\n----"

    def reference_embed(self, reference: str) -> str:
        return f"plantuml::{reference}[]"

    def code_block(self, lang: str, code: str) -> str:
        return adoc_codeblock(lang, code)

    def escape_line(self, line: str) -> str:
        if self.heading_re.match(line) or self.delimiter_re.match(line):
            return "{empty}" + line
        return line


class MarkdownDialect(MarkupDialect):
    """Markdown output with plantuml code fences."""

    extension = ".md"
    heading_re = re.compile(r"^(\s{0,3})#")
    setext_re = re.compile(r"^(\s{0,3})(=+|-+)\s*$")

    def heading(self, level: int, title: str) -> str:
        # `<T>` in a signature would otherwise be read as inline HTML
        title = title.replace("<", "\\<")
        return f"{'#' * level} {title}"

    def inline_embed(self, diagram: str) -> str:
        return md_codeblock("plantuml", diagram)

    def reference_embed(self, reference: str) -> str:
        return f"![{PurePosixPath(reference).stem}]({reference})"

    def code_block(self, lang: str, code: str) -> str:
        return md_codeblock(lang, code)

    def escape_line(self, line: str) -> str:
        m = self.setext_re.match(line)
        if m:
            return line[: m.end(1)] + "\\" + line[m.end(1) :]
        return self.heading_re.sub(r"\1\\#", line, count=1)


DIALECTS: dict[OutputFormat, MarkupDialect] = {
    OutputFormat.ASCIIDOC: AsciiDocDialect(),
    OutputFormat.MARKDOWN: MarkdownDialect(),
}


def dialect_for(output_format: OutputFormat) -> MarkupDialect:
    """Return the dialect for an output format."""
    dialect = DIALECTS.get(output_format)
    if dialect is None:
        msg = f"Unknown output format: {output_format}"
        raise ValueError(msg)
    return dialect


def fence_language(info: str) -> str:
    """Return the code language of a fence info string (``rust`` by default)."""
    words = [w for w in re.split(r"[\s,]+", info) if w]
    for word in words:
        if word not in RUSTDOC_ATTRIBUTES:
            return word
    return "rust"


def _code_text(lang: str, code: list[str]) -> str:
    if lang != "rust":
        return "\n".join(code)
    return "\n".join(line for line in map(_unhide, code) if line is not None)


def _unhide(line: str) -> str | None:
    """Drop rustdoc hidden lines (``# use foo;``) and unescape ``##``."""
    stripped = line.lstrip()
    indent = line[: len(line) - len(stripped)]
    if stripped == "#" or stripped.startswith("# "):
        return None
    if stripped.startswith("##"):
        return indent + stripped[1:]
    return line
