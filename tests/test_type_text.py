"""Tests for rendering type references from tokens."""

import pytest

from rustitect.lexer import tokenize
from rustitect.type_text import format_tokens, split_top_level, type_names


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("Vec < Option<T> >", "Vec<Option<T>>"),
        ("& 'a  mut str", "&'a mut str"),
        ("[u8;4]", "[u8; 4]"),
        ("Box<dyn Fn(i32)->i32+Send>", "Box<dyn Fn(i32) -> i32 + Send>"),
        ("HashMap<String,Vec<u8>>", "HashMap<String, Vec<u8>>"),
        ("&mut [u8]", "&mut [u8]"),
        ("std :: rc :: Rc<T>", "std::rc::Rc<T>"),
        ("impl Iterator<Item=u8>", "impl Iterator<Item = u8>"),
        ("(A,B)", "(A, B)"),
    ],
)
def test_format_tokens(source: str, expected: str) -> None:
    """Verify canonical spacing of type references."""
    assert format_tokens(tokenize(source)) == expected


def test_type_names_skip_paths_and_keywords() -> None:
    """Verify path prefixes, keywords and bindings are not type names."""
    tokens = tokenize("Option<std::rc::Rc<RefCell<dyn Node>>>")
    assert type_names(tokens) == ("Option", "Rc", "RefCell", "Node")


def test_type_names_skip_associated_bindings() -> None:
    """Verify associated type bindings are left out."""
    assert type_names(tokenize("Box<dyn Iterator<Item = Engine>>")) == (
        "Box",
        "Iterator",
        "Engine",
    )


def test_type_names_deduplicate_and_unraw() -> None:
    """Verify repeated and raw identifiers are reported once."""
    assert type_names(tokenize("(r#Engine, Engine)")) == ("Engine",)


def test_split_top_level() -> None:
    """Verify splitting ignores separators inside brackets."""
    parts = split_top_level(tokenize("a: HashMap<K, V>, b: (u8, u8),"))
    assert [format_tokens(p) for p in parts] == ["a: HashMap<K, V>", "b: (u8, u8)"]
