"""Logic for rendering a StructuralModel as a PlantUML class diagram."""

from rustitect.item_kind import ItemKind
from rustitect.plantuml_escape import plantuml_escape
from rustitect.relationship import Relationship, RelationshipKind
from rustitect.source_item import Field, Method, SourceItem
from rustitect.structural_model import StructuralModel

INDENT = "    "

BLOCK_KEYWORDS = {
    ItemKind.RECORD: "class",
    ItemKind.ENUM: "enum",
    ItemKind.CAPABILITY: "interface",
}

CONNECTORS = {
    RelationshipKind.COMPOSITION: "*--",
    RelationshipKind.CAPABILITY: "..|>",
}


def render_diagram(model: StructuralModel) -> str:
    """Render the model as PlantUML class diagram markup."""
    blocks = [_render_item(item) for item in model.items.values()]
    body = "\n\n".join(blocks)
    if model.relationships:
        connectors = [_render_relationship(rel, model) for rel in model.relationships]
        body += "\n\n" + "\n".join(connectors)
    return f"@startuml\n\n{body}\n\n@enduml"


def _render_item(item: SourceItem) -> str:
    keyword = BLOCK_KEYWORDS.get(item.kind)
    if keyword is None:
        msg = f"Unknown item kind: {item.kind}"
        raise ValueError(msg)

    if item.generics:
        params = ", ".join(item.generics)
        title = f'"{plantuml_escape(f"{item.name}<{params}>")}"'
        header = f"{keyword} {title} as {item.name} {{"
    else:
        header = f'{keyword} "{plantuml_escape(item.name)}" {{'

    lines = [header]
    for f in item.fields:
        lines.append(INDENT + _render_field(f, item.kind))
    for m in item.methods:
        lines.append(INDENT + _render_method(m))
    lines.append("}")
    return "\n".join(lines)


def _render_field(field: Field, kind: ItemKind) -> str:
    if kind is ItemKind.ENUM:
        if field.type_ref is None:
            return field.name
        payload = field.type_ref
        if payload.startswith("{"):
            payload = "(" + payload[1:-1].strip() + ")"
        return plantuml_escape(field.name + payload)
    return plantuml_escape(
        f"{field.visibility.marker} {field.name}: {field.type_ref}"
    )


def _render_method(method: Method) -> str:
    static = "{static} " if method.is_associated else ""
    text = f"{method.visibility.marker} {static}{method.signature}"
    if method.return_type:
        text += f": {method.return_type}"
    return plantuml_escape(text)


def _render_relationship(rel: Relationship, model: StructuralModel) -> str:
    connector = CONNECTORS.get(rel.kind)
    if connector is None:
        msg = f"Unknown relationship kind: {rel.kind}"
        raise ValueError(msg)
    source = _reference(rel.source, model)
    return f"{source} {connector} {_reference(rel.target, model)}"


def _reference(name: str, model: StructuralModel) -> str:
    """Return how a connector names an item: generic items by their alias."""
    item = model.items.get(name)
    if item is not None and item.generics:
        return item.name
    return f'"{plantuml_escape(name)}"'
