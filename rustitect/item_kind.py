"""Closed set of declaration kinds a structural model can hold."""

from enum import Enum


class ItemKind(Enum):
    """Kind of a top-level declaration."""

    RECORD = "record"  # struct, union
    ENUM = "enum"
    CAPABILITY = "capability"  # trait
