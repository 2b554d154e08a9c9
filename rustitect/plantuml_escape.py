"""Utility for making text safe inside PlantUML class diagram members."""

import re

# Creole tags PlantUML would interpret inside member text, e.g. `Vec<b>`.
CREOLE_TAG_RE = re.compile(
    r"<(?=/?(?:b|i|u|s|w|del|strike|color|size|font|back|img|sub|sup|code"
    r"|plain|math|latex)\b)",
    re.IGNORECASE,
)


def plantuml_escape(text: str) -> str:
    """Escape creole markup that a Rust type could spell by accident.

    The PlantUML escape character ``~`` is put before a ``<`` that opens a
    creole tag and before ``__``, which would otherwise start underlining.
    """
    text = CREOLE_TAG_RE.sub("~<", text)
    return text.replace("__", "~__")
