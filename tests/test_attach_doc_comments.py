"""Tests for pairing doc comments with declarations."""

from rustitect.attach_doc_comments import attach_doc_comments
from rustitect.doc_comment import DocComment
from rustitect.lexer import tokenize


def test_attach_to_next_token() -> None:
    """Verify a doc run attaches to the first significant token after it."""
    attached = attach_doc_comments(tokenize("/// Hello\n/// World\nstruct A;"))
    assert [t.text for t in attached.tokens] == ["struct", "A", ";"]
    assert attached.doc_at(0) == DocComment(("Hello", "World"))
    assert attached.doc_at(1) is None
    assert attached.dangling is None


def test_blank_lines_and_plain_comments_do_not_break_a_run() -> None:
    """Verify that only significant tokens end a doc run."""
    source = "/// a\n\n// plain\n/// b\nstruct A;"
    attached = attach_doc_comments(tokenize(source))
    assert attached.doc_at(0).lines == ("a", "b")


def test_docs_attach_to_member_tokens() -> None:
    """Verify field docs are keyed by the index of the field's first token."""
    source = "struct A {\n    /// The x.\n    x: u8,\n}"
    attached = attach_doc_comments(tokenize(source))
    index = [t.text for t in attached.tokens].index("x")
    assert attached.doc_at(index).text == "The x."


def test_dangling_doc_comment() -> None:
    """Verify a doc run at end of input is reported as dangling."""
    attached = attach_doc_comments(tokenize("struct A;\n/// Orphan\n/// text"))
    assert attached.dangling is not None
    assert attached.dangling.text == "Orphan"
    assert attached.dangling.line == 2


def test_inner_docs_are_dropped() -> None:
    """Verify inner doc comments never attach to declarations."""
    attached = attach_doc_comments(tokenize("//! Module\nstruct A;"))
    assert attached.docs == {}
