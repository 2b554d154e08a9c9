"""Data models for relationships between declarations."""

from dataclasses import dataclass
from enum import Enum


class RelationshipKind(Enum):
    """Kind of a relationship between two items."""

    COMPOSITION = "composition"
    CAPABILITY = "capability"  # type implements trait


# Ordering of kinds when source and target are equal.
KIND_ORDER = {RelationshipKind.COMPOSITION: 0, RelationshipKind.CAPABILITY: 1}


@dataclass(frozen=True)
class Relationship:
    """A directed relationship from an owning item to another item."""

    source: str
    target: str
    kind: RelationshipKind
    target_external: bool = False  # target is not declared in the model
