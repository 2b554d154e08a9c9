"""Errors and warnings raised while extracting a structural model."""

from dataclasses import dataclass


class SourceSyntaxError(ValueError):
    """Source text that cannot be parsed under the declaration grammar."""

    def __init__(self, line: int, column: int, message: str) -> None:
        """Initialize the error with a 1-based line and column."""
        super().__init__(f"{line}:{column}: {message}")
        self.line = line
        self.column = column
        self.message = message


@dataclass(frozen=True)
class UnsupportedConstruct:
    """A skipped declaration, recorded as a non-fatal warning."""

    line: int
    column: int
    description: str

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.description}"


class UnsupportedConstructError(ValueError):
    """Raised in strict mode instead of recording an UnsupportedConstruct."""

    def __init__(self, construct: UnsupportedConstruct) -> None:
        """Wrap the construct that was rejected."""
        super().__init__(str(construct))
        self.construct = construct
