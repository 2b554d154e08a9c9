"""Tests for extracting the structural model from Rust source."""

from pathlib import Path

import pytest

from rustitect.errors import SourceSyntaxError, UnsupportedConstructError
from rustitect.extract import extract
from rustitect.item_kind import ItemKind
from rustitect.relationship import Relationship, RelationshipKind
from rustitect.visibility import Visibility

RESOURCES = Path(__file__).parent / "resources"


def test_extract_person_example() -> None:
    """Verify the documented Person struct and its inherent impl."""
    model = extract((RESOURCES / "simple_struct.rs").read_text(encoding="utf-8"))
    person = model.items["Person"]

    assert person.kind is ItemKind.RECORD
    assert person.doc.text == (
        "Represents a person with a name, age, and activity status."
    )
    assert [(f.name, f.type_ref) for f in person.fields] == [
        ("name", "String"),
        ("age", "u32"),
        ("is_active", "bool"),
    ]
    assert person.fields[0].doc.text == "The name of the person."

    new, introduce = person.methods
    assert new.signature == "new(name: String, age: u32, is_active: bool)"
    assert new.return_type == "Self"
    assert new.is_associated
    assert new.visibility is Visibility.PUBLIC
    assert [t for t, _ in new.doc.sections().sections] == ["Arguments", "Example"]
    assert introduce.signature == "introduce()"
    assert introduce.receiver == "&self"
    assert introduce.visibility is Visibility.PRIVATE
    assert model.relationships == ()
    assert model.warnings == ()


def test_extract_tuple_and_unit_structs() -> None:
    """Verify tuple fields are numbered and unit structs have no fields."""
    model = extract("pub struct Meters(pub f64, u8);\nstruct Marker;")
    meters = model.items["Meters"]
    assert [(f.name, f.type_ref, f.visibility) for f in meters.fields] == [
        ("0", "f64", Visibility.PUBLIC),
        ("1", "u8", Visibility.PRIVATE),
    ]
    assert model.items["Marker"].fields == ()


def test_extract_enum_variants() -> None:
    """Verify unit, tuple and struct variants and discriminants."""
    source = """
pub enum Shape {
    /// A point.
    Point,
    Circle(f64),
    Rect { w: f64, h: f64 },
    Custom = 1 << 3,
}
"""
    shape = extract(source).items["Shape"]
    assert shape.kind is ItemKind.ENUM
    assert [(v.name, v.type_ref) for v in shape.fields] == [
        ("Point", None),
        ("Circle", "(f64)"),
        ("Rect", "{ w: f64, h: f64 }"),
        ("Custom", None),
    ]
    assert shape.fields[0].doc.text == "A point."


def test_extract_trait_methods() -> None:
    """Verify trait methods are public and associated items are ignored."""
    source = """
/// Greets people.
pub trait Greeter: Clone {
    type Output;
    const N: usize = 3;
    /// Says hello.
    fn greet(&self, name: &str) -> String;
    fn default_name() -> String {
        String::from("x")
    }
}
"""
    greeter = extract(source).items["Greeter"]
    assert greeter.kind is ItemKind.CAPABILITY
    assert greeter.doc.text == "Greets people."
    greet, default_name = greeter.methods
    assert greet.signature == "greet(name: &str)"
    assert greet.receiver == "&self"
    assert greet.return_type == "String"
    assert greet.visibility is Visibility.PUBLIC
    assert greet.doc.text == "Says hello."
    assert default_name.is_associated


def test_extract_impl_before_type_and_multiple_impls() -> None:
    """Verify inherent methods are merged whatever the impl position."""
    source = """
impl Counter {
    pub fn new() -> Self { Counter { n: 0 } }
}
pub struct Counter { n: u32 }
impl Counter {
    pub fn increment(&mut self) { self.n += 1; }
}
"""
    counter = extract(source).items["Counter"]
    assert [m.name for m in counter.methods] == ["new", "increment"]
    assert counter.methods[1].receiver == "&mut self"


def test_trait_impl_adds_relationship_only() -> None:
    """Verify a trait impl yields a capability without adding methods."""
    source = """
pub trait Drive { fn drive(&self); }
pub struct Car;
impl Drive for Car {
    fn drive(&self) {}
}
"""
    model = extract(source)
    assert model.items["Car"].methods == ()
    assert model.relationships == (
        Relationship("Car", "Drive", RelationshipKind.CAPABILITY),
    )


def test_external_capability_is_kept() -> None:
    """Verify impls of traits outside the model keep an external target."""
    source = """
struct Person;
impl std::fmt::Display for Person {
    fn fmt(&self, f: &mut std::fmt::Formatter<'_>) -> std::fmt::Result { Ok(()) }
}
"""
    (rel,) = extract(source).relationships
    assert rel == Relationship(
        "Person", "Display", RelationshipKind.CAPABILITY, target_external=True
    )


def test_composition_relationships() -> None:
    """Verify compositions come from field types naming other items."""
    source = """
struct Engine;
struct Car { engine: Engine, spare: Option<Box<Engine>>, name: String }
struct Node { next: Option<Box<Node>> }
"""
    assert extract(source).relationships == (
        Relationship("Car", "Engine", RelationshipKind.COMPOSITION),
    )


def test_relationship_order() -> None:
    """Verify relationships are ordered by source position then target."""
    source = """
struct Wheel;
struct Car { wheel: Wheel, engine: Engine }
struct Engine;
trait Drive {}
impl Drive for Car {}
"""
    rels = extract(source).relationships
    assert [(r.source, r.target, r.kind) for r in rels] == [
        ("Car", "Drive", RelationshipKind.CAPABILITY),
        ("Car", "Engine", RelationshipKind.COMPOSITION),
        ("Car", "Wheel", RelationshipKind.COMPOSITION),
    ]


def test_doc_comments_around_attributes() -> None:
    """Verify docs before, between and inside attributes are concatenated."""
    source = """
/// First.
#[derive(Debug)]
/// Second.
#[doc = "Third."]
pub struct A;
"""
    assert extract(source).items["A"].doc.lines == ("First.", "Second.", "Third.")


def test_visibility_modifiers() -> None:
    """Verify pub, restricted and private visibility."""
    source = """
pub struct A;
pub(crate) struct B;
pub(in crate::x) struct C;
struct D;
"""
    items = extract(source).items
    assert [i.visibility for i in items.values()] == [
        Visibility.PUBLIC,
        Visibility.RESTRICTED,
        Visibility.RESTRICTED,
        Visibility.PRIVATE,
    ]


def test_generics_and_where_clause() -> None:
    """Verify generic parameter names and formatted field types."""
    source = """
pub struct Wrapper<'a, T: Clone, const N: usize> where T: Default {
    v: &'a [T; N],
}
"""
    wrapper = extract(source).items["Wrapper"]
    assert wrapper.generics == ("'a", "T", "N")
    assert wrapper.fields[0].type_ref == "&'a [T; N]"


def test_function_qualifiers_and_patterns() -> None:
    """Verify qualifiers are skipped and parameter patterns simplified."""
    source = """
struct A;
impl A {
    pub const unsafe fn f(mut x: u8) -> u8 where u8: Copy { x }
    pub async fn g(self: Box<Self>) {}
    pub(crate) extern "C" fn h() {}
}
"""
    f, g, h = extract(source).items["A"].methods
    assert f.signature == "f(x: u8)"
    assert g.receiver == "self: Box<Self>"
    assert g.parameters == ()
    assert h.visibility is Visibility.RESTRICTED


def test_raw_identifiers() -> None:
    """Verify raw identifiers lose their prefix."""
    model = extract("struct r#type { r#match: u8 }")
    assert model.items["type"].fields[0].name == "match"


def test_unsupported_constructs_are_warnings() -> None:
    """Verify skipped items are recorded with their position."""
    source = """use std::fmt;
fn helper() -> Vec<u8> { vec![1] }
const X: S = S { a: 1 };
macro_rules! m { () => {} }
mod inner { struct Hidden; }
struct A;
"""
    model = extract(source)
    assert list(model.items) == ["A"]
    assert [(w.line, w.description) for w in model.warnings] == [
        (1, "'use' item"),
        (2, "free function 'helper'"),
        (3, "'const' item"),
        (4, "macro 'macro_rules!'"),
        (5, "module 'inner'"),
    ]


def test_undeclared_impl_and_duplicate_are_warnings() -> None:
    """Verify impls of unknown types and duplicate names are skipped."""
    source = """
struct A;
struct A;
impl Missing { fn f() {} }
"""
    model = extract(source)
    assert list(model.items) == ["A"]
    assert [w.description for w in model.warnings] == [
        "duplicate declaration of 'A'",
        "impl for undeclared type 'Missing'",
    ]


def test_dangling_doc_comment_is_a_warning() -> None:
    """Verify a doc comment at end of input is reported."""
    model = extract("struct A;\n/// Orphan")
    assert [str(w) for w in model.warnings] == [
        "2:1: doc comment not followed by a declaration"
    ]


def test_strict_mode_raises() -> None:
    """Verify strict extraction fails on the first skipped construct."""
    with pytest.raises(UnsupportedConstructError) as exc:
        extract("fn main() {}\nstruct A;", strict=True)
    assert exc.value.construct.line == 1


@pytest.mark.parametrize(
    ("source", "position", "message"),
    [
        ("struct 3", (1, 8), "expected struct name, found '3'"),
        ("struct A {", (1, 11), "expected field name, found end of input"),
        ("struct A { x: u8 ]", (1, 18), "unexpected ']'"),
        ("struct A { x: (u8] }", (1, 18), "mismatched closing delimiter ']'"),
        ("impl A { fn f( }", (1, 16), "mismatched closing delimiter '}'"),
        ("let x = 1;", (1, 1), "expected item, found 'let'"),
    ],
)
def test_syntax_errors(source: str, position: tuple[int, int], message: str) -> None:
    """Verify fatal errors carry line, column and message."""
    with pytest.raises(SourceSyntaxError) as exc:
        extract(source)
    assert (exc.value.line, exc.value.column) == position
    assert exc.value.message == message


def test_empty_input() -> None:
    """Verify empty or comment-only input yields an empty model."""
    assert extract("").is_empty
    assert extract("// nothing here\n/* at all */").is_empty
