"""Data models for declarations extracted from Rust source."""

from dataclasses import dataclass

from rustitect.doc_comment import EMPTY_DOC, DocComment
from rustitect.item_kind import ItemKind
from rustitect.visibility import Visibility


@dataclass(frozen=True)
class Parameter:
    """A named, typed method parameter."""

    name: str
    type_ref: str

    def __str__(self) -> str:
        return f"{self.name}: {self.type_ref}"


@dataclass(frozen=True)
class Field:
    """A struct field or enum variant."""

    name: str
    type_ref: str | None  # None for unit enum variants
    visibility: Visibility = Visibility.PRIVATE
    doc: DocComment = EMPTY_DOC
    type_names: tuple[str, ...] = ()  # type names mentioned by type_ref


@dataclass(frozen=True)
class Method:
    """A method or associated function."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    receiver: str | None = None  # &self, &mut self, self, ... or None
    visibility: Visibility = Visibility.PRIVATE
    doc: DocComment = EMPTY_DOC

    @property
    def is_associated(self) -> bool:
        """Check whether this is an associated function without receiver."""
        return self.receiver is None

    @property
    def signature(self) -> str:
        """Return the name and parameter list, e.g. ``new(name: String)``."""
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.name}({params})"


@dataclass(frozen=True)
class SourceItem:
    """A top-level declaration: struct, enum or trait."""

    name: str
    kind: ItemKind
    visibility: Visibility = Visibility.PRIVATE
    generics: tuple[str, ...] = ()
    fields: tuple[Field, ...] = ()
    methods: tuple[Method, ...] = ()
    doc: DocComment = EMPTY_DOC
    line: int = 0
