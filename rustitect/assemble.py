"""Logic for assembling the document of a StructuralModel."""

from rustitect.assembly_options import AssemblyOptions, EmbedMode
from rustitect.doc_comment import DocComment
from rustitect.markup_dialect import MarkupDialect, dialect_for
from rustitect.source_item import SourceItem
from rustitect.structural_model import StructuralModel


def assemble(
    model: StructuralModel,
    diagram_text: str,
    options: AssemblyOptions | None = None,
) -> str | tuple[str, str]:
    """Assemble the document for a model and its rendered diagram.

    Every item gets a heading, the diagram embed, its description and tagged
    sections, then one subsection per field and per method. In reference mode
    the diagram is returned alongside the document instead of being inlined;
    with EmbedMode.NONE the document carries no diagram at all.
    """
    options = options or AssemblyOptions()
    dialect = dialect_for(options.output_format)
    embed: str | None = None
    if options.embed is EmbedMode.INLINE:
        embed = dialect.inline_embed(diagram_text)
    elif options.embed is EmbedMode.REFERENCE:
        embed = dialect.reference_embed(options.diagram_reference)

    blocks: list[str] = []
    if model.is_empty and embed is not None:
        blocks.append(embed)
    for item in model.items.values():
        blocks.extend(_render_item(item, embed, dialect, options))

    document = "\n\n".join(blocks) + "\n"
    if options.embed is EmbedMode.REFERENCE:
        return document, diagram_text
    return document


def _render_item(
    item: SourceItem,
    embed: str | None,
    dialect: MarkupDialect,
    options: AssemblyOptions,
) -> list[str]:
    level = options.heading_level
    blocks = [dialect.heading(level, item.name)]
    if embed is not None:
        blocks.append(embed)
    blocks.extend(_render_doc(item.doc, level + 1, dialect, options))

    for f in item.fields:
        blocks.append(dialect.heading(level + 1, f.name))
        blocks.extend(_render_doc(f.doc, level + 2, dialect, options))
    for m in item.methods:
        blocks.append(dialect.heading(level + 1, m.signature))
        blocks.extend(_render_doc(m.doc, level + 2, dialect, options))
    return blocks


def _render_doc(
    doc: DocComment,
    tag_level: int,
    dialect: MarkupDialect,
    options: AssemblyOptions,
) -> list[str]:
    """Render a description followed by one subsection per tag."""
    sections = doc.sections(options.tags)
    blocks = []
    if sections.description:
        blocks.append(dialect.render_text(sections.description))
    for title, body in sections.sections:
        blocks.append(dialect.heading(tag_level, title))
        if body:
            blocks.append(dialect.render_text(body))
    return blocks
