"""Tests for running the pipeline per output format."""

from pathlib import Path

import pytest

from rustitect.errors import UnsupportedConstructError
from rustitect.load_config import load_config
from rustitect.processing import format_from_config, process

RESOURCES = Path(__file__).parent / "resources"
PERSON = (RESOURCES / "simple_struct.rs").read_text(encoding="utf-8")


def test_process_plantuml_only() -> None:
    """Verify the plantuml format returns only the diagram."""
    buffers = process(PERSON, "plantuml")
    assert list(buffers) == ["plantuml"]
    assert 'class "Person"' in buffers["plantuml"]


def test_process_inline_formats() -> None:
    """Verify inline formats embed the diagram in the document."""
    adoc = process(PERSON, "asciidoc")["asciidoc"]
    assert "[plantuml]\n----\n@startuml" in adoc
    markdown = process(PERSON, "markdown")["markdown"]
    assert markdown.startswith("## Person\n\n```plantuml\n@startuml")


def test_process_reference_formats() -> None:
    """Verify -plantuml formats return a document and a diagram."""
    buffers = process(PERSON, "markdown-plantuml", diagram_reference="person.puml")
    assert list(buffers) == ["markdown", "plantuml"]
    assert "![person](person.puml)" in buffers["markdown"]
    assert buffers["plantuml"].startswith("@startuml")


def test_process_unknown_format() -> None:
    """Verify unknown formats are rejected."""
    with pytest.raises(ValueError, match="Unknown output format"):
        process(PERSON, "html")


def test_process_strict_config() -> None:
    """Verify the extract.strict setting reaches extraction."""
    config = load_config()
    config["extract"]["strict"] = True
    with pytest.raises(UnsupportedConstructError):
        process("fn main() {}", "plantuml", config)


def test_format_from_config() -> None:
    """Verify the default output format follows the document section."""
    assert format_from_config(load_config()) == "asciidoc"
    config = {"document": {"output_format": "markdown", "embed": "reference"}}
    assert format_from_config(config) == "markdown-plantuml"


def test_process_document_only_formats() -> None:
    """Verify -only formats return a document without any diagram."""
    buffers = process(PERSON, "markdown-only")
    assert list(buffers) == ["markdown"]
    assert buffers["markdown"].startswith("## Person\n\nRepresents a person")
    assert "plantuml" not in buffers["markdown"]
    adoc = process(PERSON, "asciidoc-only")["asciidoc"]
    assert adoc.startswith("== Person\n\nRepresents a person")
    assert "@startuml" not in adoc


def test_format_from_config_document_only() -> None:
    """Verify embed: none selects the document-only format."""
    config = {"document": {"output_format": "markdown", "embed": "none"}}
    assert format_from_config(config) == "markdown-only"


def test_process_null_extract_section() -> None:
    """Verify an empty extract section falls back to lenient extraction."""
    config = load_config()
    config["extract"] = None
    assert process("fn main() {}", "plantuml", config) == {
        "plantuml": "@startuml\n\n\n\n@enduml"
    }
