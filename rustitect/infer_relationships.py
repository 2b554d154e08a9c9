"""Logic for inferring relationships between extracted items."""

from collections.abc import Iterable, Mapping

from rustitect.item_kind import ItemKind
from rustitect.relationship import Relationship, RelationshipKind
from rustitect.source_item import SourceItem


def infer_relationships(
    items: Mapping[str, SourceItem],
    implementations: Iterable[tuple[str, str]] = (),
) -> list[Relationship]:
    """Infer compositions from field types and capabilities from trait impls.

    ``implementations`` holds ``(type name, trait name)`` pairs. A trait that
    is not declared as a capability item of the model is kept as an external
    target.
    """
    relationships: list[Relationship] = []
    for item in items.values():
        for f in item.fields:
            for name in f.type_names:
                if name != item.name and name in items:
                    relationships.append(
                        Relationship(item.name, name, RelationshipKind.COMPOSITION)
                    )

    for type_name, capability in implementations:
        target = items.get(capability)
        external = target is None or target.kind is not ItemKind.CAPABILITY
        relationships.append(
            Relationship(
                type_name,
                capability,
                RelationshipKind.CAPABILITY,
                target_external=external,
            )
        )
    return relationships
