"""Runs the extraction, diagram and document stages for one output format."""

from typing import Any

from rustitect.assemble import assemble
from rustitect.assembly_options import AssemblyOptions, EmbedMode
from rustitect.extract import extract
from rustitect.load_config import load_config
from rustitect.markup_dialect import OutputFormat, dialect_for
from rustitect.render_diagram import render_diagram

OUTPUT_FORMATS = (
    "asciidoc",
    "asciidoc-plantuml",
    "asciidoc-only",
    "markdown",
    "markdown-plantuml",
    "markdown-only",
    "plantuml",
)

# Format suffix -> how the diagram is embedded in the document
EMBED_SUFFIXES = {
    "": EmbedMode.INLINE,
    "plantuml": EmbedMode.REFERENCE,
    "only": EmbedMode.NONE,
}

EXTENSIONS = {fmt.value: dialect_for(fmt).extension for fmt in OutputFormat}
EXTENSIONS["plantuml"] = ".puml"


def format_from_config(config: dict[str, Any]) -> str:
    """Return the output format named by the ``document`` config section."""
    document = config.get("document") or {}
    name = str(document.get("output_format", "asciidoc"))
    embed = EmbedMode(document.get("embed", EmbedMode.INLINE.value))
    for suffix, mode in EMBED_SUFFIXES.items():
        if mode is embed and suffix:
            return f"{name}-{suffix}"
    return name


def process(
    source: str,
    output_format: str = "asciidoc",
    config: dict[str, Any] | None = None,
    diagram_reference: str | None = None,
) -> dict[str, str]:
    """Process Rust source into named output buffers.

    Returns a dict keyed by ``asciidoc``, ``markdown`` or ``plantuml``. The
    ``-plantuml`` formats reference the diagram instead of inlining it and
    return the diagram as a second buffer; the ``-only`` formats leave the
    diagram out.
    """
    if output_format not in OUTPUT_FORMATS:
        msg = f"Unknown output format: {output_format}"
        raise ValueError(msg)
    if config is None:
        config = load_config()

    strict = bool((config.get("extract") or {}).get("strict", False))
    model = extract(source, strict=strict)
    diagram = render_diagram(model)
    if output_format == "plantuml":
        return {"plantuml": diagram}

    doc_format, _, suffix = output_format.partition("-")
    overrides: dict[str, Any] = {
        "output_format": OutputFormat(doc_format),
        "embed": EMBED_SUFFIXES[suffix],
    }
    if diagram_reference is not None:
        overrides["diagram_reference"] = diagram_reference
    options = AssemblyOptions.from_config(config, **overrides)

    result = assemble(model, diagram, options)
    if isinstance(result, tuple):
        document, diagram = result
        return {doc_format: document, "plantuml": diagram}
    return {doc_format: result}
