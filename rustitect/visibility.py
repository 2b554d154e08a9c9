"""Visibility of declarations and their PlantUML markers."""

from enum import Enum


class Visibility(Enum):
    """Visibility of an item, field or method."""

    PUBLIC = "public"  # pub
    RESTRICTED = "restricted"  # pub(crate), pub(super), pub(in path)
    PRIVATE = "private"

    @property
    def marker(self) -> str:
        """Return the PlantUML visibility marker."""
        if self is Visibility.PUBLIC:
            return "+"
        if self is Visibility.RESTRICTED:
            return "~"
        if self is Visibility.PRIVATE:
            return "-"
        msg = f"Unknown visibility: {self!r}"
        raise ValueError(msg)
