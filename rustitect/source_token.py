"""Data models for lexical tokens of Rust source."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kind of a lexical token."""

    IDENT = "ident"
    LIFETIME = "lifetime"
    LITERAL = "literal"
    PUNCT = "punct"
    DOC = "doc"  # one line of an outer doc comment
    INNER_DOC = "inner_doc"  # one line of an inner (module) doc comment


@dataclass(frozen=True)
class SourceToken:
    """A token with its 1-based source position."""

    kind: TokenKind
    text: str
    line: int
    column: int

    def is_punct(self, text: str) -> bool:
        """Check whether the token is the given punctuation."""
        return self.kind is TokenKind.PUNCT and self.text == text

    def is_ident(self, text: str | None = None) -> bool:
        """Check whether the token is an identifier (optionally a specific one)."""
        return self.kind is TokenKind.IDENT and (text is None or self.text == text)
