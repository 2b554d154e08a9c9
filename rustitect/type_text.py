"""Logic for rendering token runs (types, generics, patterns) as text."""

from collections.abc import Sequence

from rustitect.source_token import SourceToken, TokenKind

RUST_KEYWORDS = frozenset(
    {
        "as",
        "async",
        "await",
        "const",
        "crate",
        "dyn",
        "enum",
        "extern",
        "fn",
        "for",
        "impl",
        "in",
        "mut",
        "pub",
        "ref",
        "self",
        "static",
        "struct",
        "super",
        "trait",
        "type",
        "unsafe",
        "use",
        "where",
    }
)

SPACED = frozenset({"->", "=>", "+", "=", "as"})
NO_SPACE_AFTER = frozenset({"::", "<", "(", "[", "&", "*", "?", "!", "#", "$"})
NO_SPACE_BEFORE = frozenset({",", ";", ":", ">", ")", "]", "::", "<", "(", "[", "?"})
PREFIX_KEYWORDS = frozenset({"mut", "dyn", "impl", "const", "unsafe"})


def format_tokens(tokens: Sequence[SourceToken]) -> str:
    """Join tokens with canonical spacing, e.g. ``Box<dyn Fn(u8) -> u8 + Send>``."""
    out: list[str] = []
    prev: str | None = None
    for tok in tokens:
        text = tok.text
        if prev is not None and _needs_space(prev, text):
            out.append(" ")
        out.append(text)
        prev = text
    return "".join(out)


def _needs_space(prev: str, text: str) -> bool:
    if text in SPACED or prev in SPACED:
        return True
    if prev in {",", ";", ":"}:
        return True
    if text in {"(", "["} and (prev in PREFIX_KEYWORDS or prev.startswith("'")):
        # &mut [u8], &'a (A, B)
        return True
    if text in NO_SPACE_BEFORE:
        return False
    return prev not in NO_SPACE_AFTER


def type_names(tokens: Sequence[SourceToken]) -> tuple[str, ...]:
    """Return the type names a type reference mentions, in order of appearance.

    Path prefixes (``std::`` in ``std::rc::Rc``), keywords, lifetimes and
    associated type bindings (``Item`` in ``Iterator<Item = u8>``) are left out.
    """
    names: list[str] = []
    for i, tok in enumerate(tokens):
        if tok.kind is not TokenKind.IDENT or tok.text in RUST_KEYWORDS:
            continue
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        if nxt is not None and (nxt.is_punct("::") or nxt.is_punct("=")):
            continue
        name = tok.text.removeprefix("r#")
        if name not in names:
            names.append(name)
    return tuple(names)


def split_top_level(
    tokens: Sequence[SourceToken], separator: str = ","
) -> list[list[SourceToken]]:
    """Split tokens at separators that are not nested in brackets."""
    parts: list[list[SourceToken]] = [[]]
    depth = 0
    for tok in tokens:
        if tok.kind is TokenKind.PUNCT:
            if tok.text in "<([{":
                depth += 1
            elif tok.text in ">)]}":
                depth -= 1
            elif tok.text == separator and depth == 0:
                parts.append([])
                continue
        parts[-1].append(tok)
    return [p for p in parts if p]
