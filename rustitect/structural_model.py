"""Immutable structural model shared by the diagram and document stages."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rustitect.errors import UnsupportedConstruct
from rustitect.relationship import KIND_ORDER, Relationship
from rustitect.source_item import SourceItem


@dataclass(frozen=True)
class StructuralModel:
    """Items in declaration order plus their ordered relationships."""

    items: Mapping[str, SourceItem] = field(
        default_factory=lambda: MappingProxyType({})
    )
    relationships: tuple[Relationship, ...] = ()
    warnings: tuple[UnsupportedConstruct, ...] = ()

    @classmethod
    def build(
        cls,
        items: Iterable[SourceItem],
        relationships: Iterable[Relationship] = (),
        warnings: Iterable[UnsupportedConstruct] = (),
    ) -> "StructuralModel":
        """Build a model, deduplicating and ordering the relationships."""
        by_name: dict[str, SourceItem] = {}
        for item in items:
            if item.name in by_name:
                msg = f"Duplicate item name: {item.name}"
                raise ValueError(msg)
            by_name[item.name] = item

        position = {name: i for i, name in enumerate(by_name)}
        unique: dict[tuple[str, str, object], Relationship] = {}
        for rel in relationships:
            if rel.source not in position:
                msg = f"Relationship source is not a model item: {rel.source}"
                raise ValueError(msg)
            unique.setdefault((rel.source, rel.target, rel.kind), rel)

        ordered = sorted(
            unique.values(),
            key=lambda r: (position[r.source], r.target, KIND_ORDER[r.kind]),
        )
        return cls(
            items=MappingProxyType(by_name),
            relationships=tuple(ordered),
            warnings=tuple(warnings),
        )

    @property
    def is_empty(self) -> bool:
        """Check whether the model holds no items."""
        return not self.items
