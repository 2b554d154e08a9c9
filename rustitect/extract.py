"""Extraction of a StructuralModel from Rust source text."""

import logging
from dataclasses import replace

from rustitect.attach_doc_comments import attach_doc_comments
from rustitect.errors import UnsupportedConstruct, UnsupportedConstructError
from rustitect.infer_relationships import infer_relationships
from rustitect.lexer import tokenize
from rustitect.parser import DeclarationParser, ParsedSource
from rustitect.source_item import Method
from rustitect.structural_model import StructuralModel

logger = logging.getLogger(__name__)


def extract(source: str, *, strict: bool = False) -> StructuralModel:
    """Extract the structural model of a Rust source file.

    Raises:
        SourceSyntaxError: If the source cannot be parsed.
        UnsupportedConstructError: In strict mode, on the first skipped construct.
    """
    attached = attach_doc_comments(tokenize(source))
    parsed = DeclarationParser(attached, strict=strict).parse()
    model = build_model(parsed, strict=strict)
    logger.debug(
        "Extracted %d items, %d relationships, %d warnings",
        len(model.items),
        len(model.relationships),
        len(model.warnings),
    )
    return model


def build_model(parsed: ParsedSource, *, strict: bool = False) -> StructuralModel:
    """Merge impl blocks into their types and infer relationships."""
    items = {item.name: item for item in parsed.items}
    warnings = list(parsed.warnings)
    inherent: dict[str, list[Method]] = {}
    implementations: list[tuple[str, str]] = []

    for impl in parsed.impls:
        if impl.self_type not in items:
            construct = UnsupportedConstruct(
                impl.line, impl.column, f"impl for undeclared type '{impl.self_type}'"
            )
            if strict:
                raise UnsupportedConstructError(construct)
            logger.warning("Skipping %s", construct)
            warnings.append(construct)
            continue
        if impl.capability is None:
            inherent.setdefault(impl.self_type, []).extend(impl.methods)
        else:
            implementations.append((impl.self_type, impl.capability))

    for name, methods in inherent.items():
        item = items[name]
        items[name] = replace(item, methods=item.methods + tuple(methods))

    return StructuralModel.build(
        items.values(),
        infer_relationships(items, implementations),
        warnings,
    )
