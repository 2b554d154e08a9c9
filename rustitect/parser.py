"""Recursive-descent parser for Rust declarations.

This is the second pass of extraction: it walks the significant tokens
produced by ``attach_doc_comments`` and builds items, impl blocks and warnings
in source order. Bodies of functions, macros and skipped items are only
balanced, never interpreted.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from rustitect.attach_doc_comments import AttachedDocs
from rustitect.doc_comment import EMPTY_DOC, DocComment
from rustitect.errors import (
    SourceSyntaxError,
    UnsupportedConstruct,
    UnsupportedConstructError,
)
from rustitect.item_kind import ItemKind
from rustitect.source_item import Field, Method, Parameter, SourceItem
from rustitect.source_token import SourceToken, TokenKind
from rustitect.type_text import format_tokens, split_top_level, type_names
from rustitect.visibility import Visibility

logger = logging.getLogger(__name__)

CLOSING = {"(": ")", "[": "]", "{": "}", "<": ">"}
FN_QUALIFIERS = frozenset({"const", "async", "unsafe", "default", "extern"})
ITEM_QUALIFIERS = frozenset({"unsafe", "auto", "default", "async"})
SEMICOLON_ITEMS = frozenset({"use", "static", "type", "const"})
RESTRICTED_SCOPES = frozenset({"crate", "super", "self"})


@dataclass(frozen=True)
class ImplBlock:
    """An ``impl`` block: inherent when ``capability`` is None."""

    self_type: str
    capability: str | None
    methods: tuple[Method, ...]
    line: int
    column: int


@dataclass
class ParsedSource:
    """Raw result of the declaration pass."""

    items: list[SourceItem] = field(default_factory=list)
    impls: list[ImplBlock] = field(default_factory=list)
    warnings: list[UnsupportedConstruct] = field(default_factory=list)


class DeclarationParser:
    """Parses significant tokens into declarations."""

    def __init__(self, attached: AttachedDocs, *, strict: bool = False) -> None:
        """Initialize the parser over tokens with attached doc comments."""
        self.attached = attached
        self.tokens = attached.tokens
        self.strict = strict
        self.pos = 0
        self.result = ParsedSource()
        self._names: set[str] = set()

    def parse(self) -> ParsedSource:
        """Parse every top-level declaration."""
        while self._peek() is not None:
            self._parse_item()
        if self.attached.dangling is not None:
            tok = self.attached.dangling
            self.warn(tok, "doc comment not followed by a declaration")
        return self.result

    def warn(self, tok: SourceToken, description: str) -> None:
        """Record a skipped construct, or raise it in strict mode."""
        construct = UnsupportedConstruct(tok.line, tok.column, description)
        if self.strict:
            raise UnsupportedConstructError(construct)
        logger.warning("Skipping %s at %d:%d", description, tok.line, tok.column)
        self.result.warnings.append(construct)

    # -----------------------------
    # Cursor
    # -----------------------------

    def _peek(self, offset: int = 0) -> SourceToken | None:
        idx = self.pos + offset
        return self.tokens[idx] if idx < len(self.tokens) else None

    def _next(self, expected: str = "token") -> SourceToken:
        tok = self._peek()
        if tok is None:
            raise self._eof_error(expected)
        self.pos += 1
        return tok

    def _error(self, tok: SourceToken, message: str) -> SourceSyntaxError:
        return SourceSyntaxError(tok.line, tok.column, message)

    def _eof_error(self, expected: str) -> SourceSyntaxError:
        if not self.tokens:
            return SourceSyntaxError(1, 1, f"expected {expected}, found end of input")
        last = self.tokens[-1]
        return SourceSyntaxError(
            last.line,
            last.column + len(last.text),
            f"expected {expected}, found end of input",
        )

    def _at_punct(self, text: str, offset: int = 0) -> bool:
        tok = self._peek(offset)
        return tok is not None and tok.is_punct(text)

    def _at_ident(self, text: str | None = None, offset: int = 0) -> bool:
        tok = self._peek(offset)
        return tok is not None and tok.is_ident(text)

    def _accept_punct(self, text: str) -> bool:
        if self._at_punct(text):
            self.pos += 1
            return True
        return False

    def _accept_ident(self, text: str) -> bool:
        if self._at_ident(text):
            self.pos += 1
            return True
        return False

    def _expect_punct(self, text: str) -> SourceToken:
        tok = self._next(f"'{text}'")
        if not tok.is_punct(text):
            raise self._error(tok, f"expected '{text}', found '{tok.text}'")
        return tok

    def _expect_ident(self, what: str) -> SourceToken:
        tok = self._next(what)
        if tok.kind is not TokenKind.IDENT:
            raise self._error(tok, f"expected {what}, found '{tok.text}'")
        return tok

    # -----------------------------
    # Balanced groups
    # -----------------------------

    def _take_group(self) -> list[SourceToken]:
        """Consume a delimited group and return the tokens inside it.

        Angle brackets are balanced only while the innermost open group is an
        angle group, so comparisons inside braces or parentheses are ignored.
        """
        opener = self._next("delimiter")
        if opener.kind is not TokenKind.PUNCT or opener.text not in CLOSING:
            raise self._error(opener, f"expected delimiter, found '{opener.text}'")
        stack = [opener]
        inner: list[SourceToken] = []
        while stack:
            tok = self._peek()
            if tok is None:
                top = stack[-1]
                raise self._error(top, f"unclosed delimiter '{top.text}'")
            self.pos += 1
            if tok.kind is TokenKind.PUNCT:
                if self._opens(tok, stack):
                    stack.append(tok)
                elif self._closes(tok, stack):
                    top = stack.pop()
                    if CLOSING[top.text] != tok.text:
                        raise self._error(
                            tok, f"mismatched closing delimiter '{tok.text}'"
                        )
                    if not stack:
                        return inner
            inner.append(tok)
        return inner

    def _collect(
        self, terminators: frozenset[str] | set[str], *, angles: bool = True
    ) -> list[SourceToken]:
        """Collect tokens up to a terminator outside any group (not consumed)."""
        out: list[SourceToken] = []
        stack: list[SourceToken] = []
        while True:
            tok = self._peek()
            if tok is None:
                expected = " or ".join(f"'{t}'" for t in sorted(terminators))
                raise self._eof_error(expected)
            if not stack and tok.text in terminators and tok.kind in (
                TokenKind.PUNCT,
                TokenKind.IDENT,
            ):
                return out
            if tok.kind is TokenKind.PUNCT:
                if tok.text in "([{" or (
                    angles and tok.text == "<" and (not stack or stack[-1].text == "<")
                ):
                    stack.append(tok)
                elif tok.text in ")]}" or (
                    angles and tok.text == ">" and (not stack or stack[-1].text == "<")
                ):
                    if not stack:
                        raise self._error(tok, f"unexpected '{tok.text}'")
                    top = stack.pop()
                    if CLOSING[top.text] != tok.text:
                        raise self._error(
                            tok, f"mismatched closing delimiter '{tok.text}'"
                        )
            out.append(tok)
            self.pos += 1

    @staticmethod
    def _opens(tok: SourceToken, stack: list[SourceToken]) -> bool:
        if tok.text in ("(", "[", "{"):
            return True
        return tok.text == "<" and stack[-1].text == "<"

    @staticmethod
    def _closes(tok: SourceToken, stack: list[SourceToken]) -> bool:
        if tok.text in (")", "]", "}"):
            return True
        return tok.text == ">" and stack[-1].text == "<"

    def _skip_to_semicolon(self) -> None:
        self._collect({";"}, angles=False)
        self._expect_punct(";")

    def _skip_block_or_semicolon(self) -> None:
        """Skip up to and including a top-level ``{...}`` block or ``;``."""
        while True:
            tok = self._peek()
            if tok is None:
                raise self._eof_error("'{' or ';'")
            if tok.is_punct(";"):
                self.pos += 1
                return
            if tok.is_punct("{"):
                self._take_group()
                return
            if tok.kind is TokenKind.PUNCT and tok.text in ("(", "["):
                self._take_group()
                continue
            if tok.kind is TokenKind.PUNCT and tok.text in (")", "]", "}"):
                raise self._error(tok, f"unexpected '{tok.text}'")
            self.pos += 1

    def _skip_where(self, terminators: set[str]) -> None:
        if self._accept_ident("where"):
            self._collect(terminators)

    # -----------------------------
    # Shared pieces
    # -----------------------------

    def _doc_here(self) -> DocComment:
        return self.attached.doc_at(self.pos) or EMPTY_DOC

    def _parse_attributes(self) -> DocComment:
        """Consume outer and inner attributes, returning the collected docs."""
        doc = self._doc_here()
        while self._at_punct("#"):
            self.pos += 1
            inner = self._accept_punct("!")
            if not self._at_punct("["):
                tok = self._next("'['")
                raise self._error(tok, f"expected '[', found '{tok.text}'")
            body = self._take_group()
            if not inner:
                doc = doc + DocComment(_doc_attribute_lines(body))
            doc = doc + self._doc_here()
        return doc

    def _parse_visibility(self) -> Visibility:
        if not self._accept_ident("pub"):
            return Visibility.PRIVATE
        if self._at_punct("("):
            scope = self._peek(1)
            if scope is not None and (
                (scope.text in RESTRICTED_SCOPES and self._at_punct(")", 2))
                or scope.is_ident("in")
            ):
                self._take_group()
                return Visibility.RESTRICTED
        return Visibility.PUBLIC

    def _parse_generics(self) -> tuple[str, ...]:
        if not self._at_punct("<"):
            return ()
        names = []
        for param in split_top_level(self._take_group()):
            first = param[0]
            if first.is_ident("const") and len(param) > 1:
                names.append(param[1].text)
            else:
                names.append(first.text)
        return tuple(names)

    def _item_keyword(self) -> SourceToken | None:
        """Look past item qualifiers and return the deciding keyword."""
        i = 0
        while True:
            tok = self._peek(i)
            if tok is None:
                return None
            nxt = self._peek(i + 1)
            if tok.text in ITEM_QUALIFIERS and tok.kind is TokenKind.IDENT:
                i += 1
            elif (
                tok.is_ident("extern")
                and nxt is not None
                and nxt.kind is TokenKind.LITERAL
            ):
                # extern "C" fn / extern "C" { ... }
                after = self._peek(i + 2)
                if after is not None and after.is_ident("fn"):
                    i += 2
                else:
                    return tok
            elif tok.is_ident("const") and nxt is not None and nxt.text in (
                "fn",
                "unsafe",
                "async",
                "extern",
            ):
                i += 1
            else:
                return tok

    def _is_macro_invocation(self) -> bool:
        i = 0
        while self._at_ident(offset=i) and self._at_punct("::", i + 1):
            i += 2
        return self._at_ident(offset=i) and self._at_punct("!", i + 1)

    def _skip_macro_invocation(self) -> None:
        while not self._at_punct("!"):
            self.pos += 1
        self.pos += 1
        if self._peek() is not None and self._peek().kind is TokenKind.IDENT:
            self.pos += 1  # macro_rules! name
        self._take_group()
        self._accept_punct(";")

    # -----------------------------
    # Items
    # -----------------------------

    def _parse_item(self) -> None:
        doc = self._parse_attributes()
        start = self._peek()
        if start is None:
            return
        vis = self._parse_visibility()
        kw = self._item_keyword()
        if kw is None:
            raise self._eof_error("item")

        if kw.is_ident("struct") or (
            kw.is_ident("union") and self._at_ident_after(kw)
        ):
            self._add_item(self._parse_record(doc, vis), start)
        elif kw.is_ident("enum"):
            self._add_item(self._parse_enum(doc, vis), start)
        elif kw.is_ident("trait"):
            item = self._parse_trait(doc, vis)
            if item is not None:
                self._add_item(item, start)
        elif kw.is_ident("impl"):
            self._parse_impl()
        elif kw.is_ident("fn"):
            name = self._name_after(kw)
            self._skip_block_or_semicolon()
            self.warn(start, f"free function '{name}'")
        elif kw.is_ident("extern") and self._at_ident("crate", self._offset_of(kw) + 1):
            self._skip_to_semicolon()
            self.warn(start, "extern crate declaration")
        elif kw.is_ident("extern"):
            self._skip_block_or_semicolon()
            self.warn(start, "extern block")
        elif kw.is_ident("mod"):
            name = self._name_after(kw)
            self._skip_block_or_semicolon()
            self.warn(start, f"module '{name}'")
        elif kw.kind is TokenKind.IDENT and kw.text in SEMICOLON_ITEMS:
            self._skip_to_semicolon()
            self.warn(start, f"'{kw.text}' item")
        elif self._is_macro_invocation():
            name = self._peek().text
            self._skip_macro_invocation()
            self.warn(start, f"macro '{name}!'")
        else:
            raise self._error(kw, f"expected item, found '{kw.text}'")

    def _offset_of(self, tok: SourceToken) -> int:
        i = 0
        while self._peek(i) is not tok:
            i += 1
        return i

    def _at_ident_after(self, kw: SourceToken) -> bool:
        return self._at_ident(offset=self._offset_of(kw) + 1)

    def _name_after(self, kw: SourceToken) -> str:
        tok = self._peek(self._offset_of(kw) + 1)
        return tok.text if tok is not None else ""

    def _add_item(self, item: SourceItem, start: SourceToken) -> None:
        if item.name in self._names:
            self.warn(start, f"duplicate declaration of '{item.name}'")
            return
        self._names.add(item.name)
        self.result.items.append(item)

    def _skip_qualifiers(self, qualifiers: frozenset[str]) -> None:
        while self._peek() is not None and self._peek().text in qualifiers:
            tok = self._next()
            if tok.is_ident("extern") and self._peek() is not None:
                if self._peek().kind is TokenKind.LITERAL:
                    self.pos += 1

    def _parse_record(self, doc: DocComment, vis: Visibility) -> SourceItem:
        self._next()  # struct / union
        name = self._expect_ident("struct name")
        generics = self._parse_generics()
        self._skip_where({"{", ";"})

        fields: tuple[Field, ...] = ()
        tok = self._peek()
        if tok is None:
            raise self._eof_error("'{', '(' or ';'")
        if tok.is_punct("{"):
            fields = self._parse_named_fields()
        elif tok.is_punct("("):
            fields = self._parse_tuple_fields()
            self._skip_where({";"})
            self._expect_punct(";")
        elif tok.is_punct(";"):
            self.pos += 1
        else:
            raise self._error(tok, f"expected '{{', '(' or ';', found '{tok.text}'")

        return SourceItem(
            name=name.text.removeprefix("r#"),
            kind=ItemKind.RECORD,
            visibility=vis,
            generics=generics,
            fields=fields,
            doc=doc,
            line=name.line,
        )

    def _parse_named_fields(self) -> tuple[Field, ...]:
        self._expect_punct("{")
        fields = []
        while not self._accept_punct("}"):
            doc = self._parse_attributes()
            if self._accept_punct("}"):
                break
            vis = self._parse_visibility()
            name = self._expect_ident("field name")
            self._expect_punct(":")
            type_tokens = self._collect({",", "}"})
            if not type_tokens:
                raise self._error(name, f"expected type for field '{name.text}'")
            self._accept_punct(",")
            fields.append(
                Field(
                    name=name.text.removeprefix("r#"),
                    type_ref=format_tokens(type_tokens),
                    visibility=vis,
                    doc=doc,
                    type_names=type_names(type_tokens),
                )
            )
        return tuple(fields)

    def _parse_tuple_fields(self) -> tuple[Field, ...]:
        self._expect_punct("(")
        fields = []
        while not self._accept_punct(")"):
            doc = self._parse_attributes()
            if self._accept_punct(")"):
                break
            vis = self._parse_visibility()
            start = self._peek()
            type_tokens = self._collect({",", ")"})
            if not type_tokens:
                raise self._error(start, "expected type")
            self._accept_punct(",")
            fields.append(
                Field(
                    name=str(len(fields)),
                    type_ref=format_tokens(type_tokens),
                    visibility=vis,
                    doc=doc,
                    type_names=type_names(type_tokens),
                )
            )
        return tuple(fields)

    def _parse_enum(self, doc: DocComment, vis: Visibility) -> SourceItem:
        self._next()  # enum
        name = self._expect_ident("enum name")
        generics = self._parse_generics()
        self._skip_where({"{"})
        self._expect_punct("{")

        variants = []
        while not self._accept_punct("}"):
            vdoc = self._parse_attributes()
            if self._accept_punct("}"):
                break
            self._parse_visibility()
            vname = self._expect_ident("variant name")
            type_ref: str | None = None
            names: list[str] = []
            if self._at_punct("("):
                payload = self._parse_tuple_fields()
                type_ref = "(" + ", ".join(f.type_ref or "" for f in payload) + ")"
                names = _merge_type_names(payload)
            elif self._at_punct("{"):
                payload = self._parse_named_fields()
                inner = ", ".join(f"{f.name}: {f.type_ref}" for f in payload)
                type_ref = f"{{ {inner} }}" if inner else "{}"
                names = _merge_type_names(payload)
            if self._accept_punct("="):
                self._collect({",", "}"}, angles=False)
            self._accept_punct(",")
            variants.append(
                Field(
                    name=vname.text.removeprefix("r#"),
                    type_ref=type_ref,
                    visibility=vis,
                    doc=vdoc,
                    type_names=tuple(names),
                )
            )

        return SourceItem(
            name=name.text.removeprefix("r#"),
            kind=ItemKind.ENUM,
            visibility=vis,
            generics=generics,
            fields=tuple(variants),
            doc=doc,
            line=name.line,
        )

    def _parse_trait(self, doc: DocComment, vis: Visibility) -> SourceItem | None:
        start = self._peek()
        self._skip_qualifiers(ITEM_QUALIFIERS)
        self._next()  # trait
        name = self._expect_ident("trait name")
        generics = self._parse_generics()
        if self._accept_punct(":"):
            self._collect({"{", "where", "="})
        if self._at_punct("="):
            self._skip_to_semicolon()
            self.warn(start, f"trait alias '{name.text}'")
            return None
        self._skip_where({"{"})
        self._expect_punct("{")

        methods = []
        while not self._accept_punct("}"):
            mdoc = self._parse_attributes()
            if self._accept_punct("}"):
                break
            self._parse_visibility()
            method = self._parse_associated_item(mdoc, Visibility.PUBLIC)
            if method is not None:
                methods.append(method)

        return SourceItem(
            name=name.text.removeprefix("r#"),
            kind=ItemKind.CAPABILITY,
            visibility=vis,
            generics=generics,
            methods=tuple(methods),
            doc=doc,
            line=name.line,
        )

    def _parse_impl(self) -> None:
        start = self._peek()
        self._skip_qualifiers(frozenset({"unsafe", "default"}))
        self._next()  # impl
        self._parse_generics()
        negative = self._accept_punct("!")
        first = self._collect({"for", "{", "where"})
        capability_tokens: list[SourceToken] | None = None
        self_tokens = first
        if self._accept_ident("for"):
            capability_tokens = first
            self_tokens = self._collect({"{", "where"})
        self._skip_where({"{"})
        self._expect_punct("{")

        methods = []
        while not self._accept_punct("}"):
            mdoc = self._parse_attributes()
            if self._accept_punct("}"):
                break
            mvis = self._parse_visibility()
            method = self._parse_associated_item(mdoc, mvis)
            if method is not None:
                methods.append(method)

        self_type = _base_name(self_tokens)
        capability = _base_name(capability_tokens) if capability_tokens else None
        if negative:
            self.warn(start, "negative impl")
            return
        if self_type is None or (capability_tokens and capability is None):
            self.warn(start, f"impl for '{format_tokens(self_tokens)}'")
            return
        self.result.impls.append(
            ImplBlock(
                self_type=self_type,
                capability=capability,
                methods=tuple(methods),
                line=start.line,
                column=start.column,
            )
        )

    def _parse_associated_item(
        self, doc: DocComment, vis: Visibility
    ) -> Method | None:
        """Parse one item of a trait or impl body; only functions are kept."""
        kw = self._item_keyword()
        if kw is None:
            raise self._eof_error("associated item")
        if kw.is_ident("fn"):
            return self._parse_fn(doc, vis)
        if kw.is_ident("type") or kw.is_ident("const"):
            logger.debug("Ignoring associated %s at %d:%d", kw.text, kw.line, kw.column)
            self._skip_to_semicolon()
            return None
        if self._is_macro_invocation():
            logger.debug("Ignoring macro invocation at %d:%d", kw.line, kw.column)
            self._skip_macro_invocation()
            return None
        raise self._error(kw, f"expected associated item, found '{kw.text}'")

    def _parse_fn(self, doc: DocComment, vis: Visibility) -> Method:
        self._skip_qualifiers(FN_QUALIFIERS)
        fn = self._next("'fn'")
        if not fn.is_ident("fn"):
            raise self._error(fn, f"expected 'fn', found '{fn.text}'")
        name = self._expect_ident("function name")
        self._parse_generics()
        if not self._at_punct("("):
            tok = self._next("'('")
            raise self._error(tok, f"expected '(', found '{tok.text}'")

        receiver: str | None = None
        parameters = []
        for part in split_top_level(self._take_group()):
            param = _strip_attributes(part)
            if not param:
                continue
            if _is_receiver(param):
                receiver = format_tokens(param)
            else:
                parameters.append(_parameter(param))

        return_type: str | None = None
        if self._accept_punct("->"):
            ret_tokens = self._collect({"{", ";", "where"})
            if not ret_tokens:
                raise self._error(self._peek(), "expected return type")
            return_type = format_tokens(ret_tokens)
        self._skip_where({"{", ";"})
        if self._at_punct("{"):
            self._take_group()
        else:
            self._expect_punct(";")

        return Method(
            name=name.text.removeprefix("r#"),
            parameters=tuple(parameters),
            return_type=return_type,
            receiver=receiver,
            visibility=vis,
            doc=doc,
        )


def _doc_attribute_lines(body: Sequence[SourceToken]) -> tuple[str, ...]:
    """Return the lines of a ``#[doc = "..."]`` attribute, or nothing."""
    if (
        len(body) == 3
        and body[0].is_ident("doc")
        and body[1].is_punct("=")
        and body[2].kind is TokenKind.LITERAL
        and body[2].text.startswith('"')
    ):
        value = body[2].text[1:-1].replace('\\"', '"').replace("\\n", "\n")
        return tuple(line.removeprefix(" ").rstrip() for line in value.split("\n"))
    return ()


def _merge_type_names(fields: Sequence[Field]) -> list[str]:
    names: list[str] = []
    for f in fields:
        for n in f.type_names:
            if n not in names:
                names.append(n)
    return names


def _base_name(tokens: Sequence[SourceToken] | None) -> str | None:
    """Return the last path segment of a type, e.g. ``Display`` for ``fmt::Display``."""
    if not tokens:
        return None
    i = 0
    while i < len(tokens) and (
        tokens[i].is_punct("&")
        or tokens[i].kind is TokenKind.LIFETIME
        or tokens[i].is_ident("mut")
        or tokens[i].is_ident("dyn")
    ):
        i += 1
    if i < len(tokens) and tokens[i].is_punct("::"):
        i += 1
    name = None
    while i < len(tokens) and tokens[i].kind is TokenKind.IDENT:
        name = tokens[i].text.removeprefix("r#")
        if i + 1 < len(tokens) and tokens[i + 1].is_punct("::"):
            i += 2
        else:
            break
    return name


def _strip_attributes(tokens: list[SourceToken]) -> list[SourceToken]:
    i = 0
    while (
        i + 1 < len(tokens)
        and tokens[i].is_punct("#")
        and tokens[i + 1].is_punct("[")
    ):
        depth = 0
        i += 1
        while i < len(tokens):
            if tokens[i].is_punct("["):
                depth += 1
            elif tokens[i].is_punct("]"):
                depth -= 1
                if depth == 0:
                    i += 1
                    break
            i += 1
    return tokens[i:]


def _colon_index(tokens: Sequence[SourceToken]) -> int | None:
    depth = 0
    for i, tok in enumerate(tokens):
        if tok.kind is not TokenKind.PUNCT:
            continue
        if tok.text in ("(", "[", "{", "<"):
            depth += 1
        elif tok.text in (")", "]", "}", ">"):
            depth -= 1
        elif tok.text == ":" and depth == 0:
            return i
    return None


def _is_receiver(tokens: Sequence[SourceToken]) -> bool:
    colon = _colon_index(tokens)
    pattern = tokens[:colon] if colon is not None else tokens
    core = [
        t
        for t in pattern
        if not (t.is_punct("&") or t.kind is TokenKind.LIFETIME or t.is_ident("mut"))
    ]
    return len(core) == 1 and core[0].is_ident("self")


def _parameter(tokens: list[SourceToken]) -> Parameter:
    colon = _colon_index(tokens)
    if colon is None:
        # Anonymous parameter of a 2015-edition trait method
        return Parameter("_", format_tokens(tokens))
    pattern = tokens[:colon]
    while len(pattern) > 1 and pattern[0].text in ("mut", "ref"):
        pattern = pattern[1:]
    return Parameter(format_tokens(pattern), format_tokens(tokens[colon + 1 :]))
