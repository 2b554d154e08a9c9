"""Logic for pairing doc comment blocks with the token that follows them."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from rustitect.doc_comment import DocComment
from rustitect.source_token import SourceToken, TokenKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttachedDocs:
    """Significant tokens plus the doc comment preceding each of them."""

    tokens: tuple[SourceToken, ...]
    docs: dict[int, DocComment] = field(default_factory=dict)  # token index -> doc
    dangling: SourceToken | None = None  # first line of a doc block at EOF

    def doc_at(self, index: int) -> DocComment | None:
        """Return the doc comment attached to the token at an index."""
        return self.docs.get(index)


def attach_doc_comments(tokens: Iterable[SourceToken]) -> AttachedDocs:
    """Attach each run of doc lines to the next significant token.

    Whitespace and plain comments never reach the token stream, so a run is
    broken only by a significant token. Inner doc comments describe the
    enclosing module and are dropped.
    """
    significant: list[SourceToken] = []
    docs: dict[int, DocComment] = {}
    pending: list[SourceToken] = []

    for tok in tokens:
        if tok.kind is TokenKind.DOC:
            pending.append(tok)
            continue
        if tok.kind is TokenKind.INNER_DOC:
            logger.debug("Dropping inner doc comment at %d:%d", tok.line, tok.column)
            continue
        if pending:
            docs[len(significant)] = DocComment(tuple(t.text for t in pending))
            pending = []
        significant.append(tok)

    return AttachedDocs(
        tokens=tuple(significant),
        docs=docs,
        dangling=pending[0] if pending else None,
    )
