"""Logic for splitting Rust source text into tokens."""

import bisect
import re

from rustitect.errors import SourceSyntaxError
from rustitect.source_token import SourceToken, TokenKind

WHITESPACE_RE = re.compile(r"\s+")
RAW_STRING_START_RE = re.compile(r'[bc]?r(#*)"')
STRING_START_RE = re.compile(r'[bc]?"')
CHAR_RE = re.compile(
    r"b?'(?:\\(?:x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]{1,8}\}|.)|[^\\'\n\r\t])'"
)
LIFETIME_RE = re.compile(r"'[^\W\d]\w*(?!')")
NUMBER_RE = re.compile(
    r"0x[0-9a-fA-F_]+\w*|0o[0-7_]+\w*|0b[01_]+\w*"
    r"|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?[\d_]+)?(?:[a-zA-Z_]\w*)?"
)
IDENT_RE = re.compile(r"(?:r#)?[^\W\d]\w*")
# Angle brackets stay single characters so generic nesting like `Vec<Vec<u8>>`
# closes one level per token.
PUNCT_RE = re.compile(r"::|->|=>|\.\.\.|\.\.=|\.\.|[{}()\[\];,.:#!?@$~&|+\-*/%^=<>]")


class Lexer:
    """Tokenizes Rust source, keeping doc comments as DOC tokens."""

    def __init__(self, source: str) -> None:
        """Initialize the lexer over a source string."""
        self.source = source.removeprefix("\ufeff").replace("\r\n", "\n")
        self.line_starts = [0]
        for m in re.finditer("\n", self.source):
            self.line_starts.append(m.end())

    def position(self, offset: int) -> tuple[int, int]:
        """Map a character offset to a 1-based (line, column) pair."""
        idx = bisect.bisect_right(self.line_starts, offset) - 1
        return idx + 1, offset - self.line_starts[idx] + 1

    def error(self, offset: int, message: str) -> SourceSyntaxError:
        """Build a syntax error located at an offset."""
        line, column = self.position(offset)
        return SourceSyntaxError(line, column, message)

    def tokenize(self) -> list[SourceToken]:
        """Split the whole source into tokens."""
        src = self.source
        n = len(src)
        tokens: list[SourceToken] = []
        i = 0
        if src.startswith("#!") and not src.startswith("#!["):
            # Shebang line
            end = src.find("\n")
            i = n if end < 0 else end

        while i < n:
            m = WHITESPACE_RE.match(src, i)
            if m:
                i = m.end()
                continue

            if src.startswith("//", i):
                i = self._line_comment(i, tokens)
                continue
            if src.startswith("/*", i):
                i = self._block_comment(i, tokens)
                continue

            m = RAW_STRING_START_RE.match(src, i)
            if m:
                closing = '"' + m.group(1)
                end = src.find(closing, m.end())
                if end < 0:
                    raise self.error(i, "unterminated raw string literal")
                i = self._push(tokens, TokenKind.LITERAL, i, end + len(closing))
                continue

            m = STRING_START_RE.match(src, i)
            if m:
                end = self._string_end(i, m.end())
                i = self._push(tokens, TokenKind.LITERAL, i, end)
                continue

            for kind, regex in (
                (TokenKind.LITERAL, CHAR_RE),
                (TokenKind.LIFETIME, LIFETIME_RE),
                (TokenKind.LITERAL, NUMBER_RE),
                (TokenKind.IDENT, IDENT_RE),
                (TokenKind.PUNCT, PUNCT_RE),
            ):
                m = regex.match(src, i)
                if m:
                    i = self._push(tokens, kind, i, m.end())
                    break
            else:
                raise self.error(i, f"unexpected character {src[i]!r}")

        return tokens

    def _push(
        self, tokens: list[SourceToken], kind: TokenKind, start: int, end: int
    ) -> int:
        line, column = self.position(start)
        tokens.append(SourceToken(kind, self.source[start:end], line, column))
        return end

    def _string_end(self, start: int, body: int) -> int:
        """Return the offset just past the closing quote of a string literal."""
        src = self.source
        j = body
        while j < len(src):
            c = src[j]
            if c == "\\":
                j += 2
                continue
            if c == '"':
                return j + 1
            j += 1
        raise self.error(start, "unterminated string literal")

    def _line_comment(self, start: int, tokens: list[SourceToken]) -> int:
        src = self.source
        end = src.find("\n", start)
        if end < 0:
            end = len(src)
        text = src[start:end]
        line, column = self.position(start)
        if text.startswith("///") and not text.startswith("////"):
            tokens.append(
                SourceToken(TokenKind.DOC, _strip_doc_line(text[3:]), line, column)
            )
        elif text.startswith("//!"):
            tokens.append(
                SourceToken(
                    TokenKind.INNER_DOC, _strip_doc_line(text[3:]), line, column
                )
            )
        return end

    def _block_comment(self, start: int, tokens: list[SourceToken]) -> int:
        """Skip a (possibly nested) block comment, emitting doc lines."""
        src = self.source
        depth = 0
        j = start
        while j < len(src):
            if src.startswith("/*", j):
                depth += 1
                j += 2
            elif src.startswith("*/", j):
                depth -= 1
                j += 2
                if depth == 0:
                    break
            else:
                j += 1
        if depth:
            raise self.error(start, "unterminated block comment")

        text = src[start:j]
        if text.startswith("/**") and not text.startswith(("/***", "/**/")):
            kind = TokenKind.DOC
        elif text.startswith("/*!"):
            kind = TokenKind.INNER_DOC
        else:
            return j

        line, column = self.position(start)
        lines = _strip_block_doc_lines(text[3:-2].split("\n"))
        first = 0
        if lines and not lines[0]:
            first = 1
        last = len(lines)
        if last > first and not lines[last - 1]:
            last -= 1
        for offset in range(first, last):
            tokens.append(SourceToken(kind, lines[offset], line + offset, column))
        return j


def tokenize(source: str) -> list[SourceToken]:
    """Tokenize Rust source text."""
    return Lexer(source).tokenize()


def _strip_doc_line(text: str) -> str:
    """Strip one space after the comment marker and trailing whitespace."""
    if text.startswith(" "):
        text = text[1:]
    return text.rstrip()


def _strip_block_doc_lines(raw_lines: list[str]) -> list[str]:
    """Strip the decoration of block doc comment lines.

    A leading `*` is removed with one following space. Later lines without it
    lose only the indentation they all share, so code keeps its shape.
    """
    indents = [
        len(raw) - len(raw.lstrip())
        for raw in raw_lines[1:]
        if raw.strip() and not raw.lstrip().startswith("*")
    ]
    shared = min(indents, default=0)
    lines = [_strip_doc_line(raw_lines[0])] if raw_lines else []
    for raw in raw_lines[1:]:
        stripped = raw.lstrip()
        if stripped.startswith("*"):
            lines.append(_strip_doc_line(stripped[1:]))
        else:
            lines.append(raw[shared:].rstrip())
    return lines
