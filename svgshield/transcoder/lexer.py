"""
Markup lexer tolerant of embedded template syntax.

Splits a fragment into tokens in a single left-to-right pass. Unlike an XML
parser it understands the brace-delimited expressions of JSX-like dialects:
`{...}` groups in text content and attribute values are consumed whole by the
balance scanner, so a `<` or `>` inside an expression never opens or closes a
tag. Unterminated constructs fail open: an unbalanced `{` is plain content.

Every token keeps character offsets into the source text; stages build their
output by replacing spans with a RangeEditor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from .scanner import scan_expression

__all__ = [
    "TokenKind",
    "QuoteKind",
    "Attribute",
    "AttributeBlock",
    "Token",
    "tokenize",
    "iter_start_tags",
    "DEFAULT_RAW_TEXT_ELEMENTS",
]

DEFAULT_RAW_TEXT_ELEMENTS: tuple[str, ...] = ("style",)


class TokenKind(Enum):
    TEXT = "text"
    EXPRESSION = "expression"      # {expr} in text content
    JSX_COMMENT = "jsx_comment"    # {/* ... */} in text content
    COMMENT = "comment"            # <!-- ... -->
    DECLARATION = "declaration"    # <!DOCTYPE ...>, <?xml ...?>, <![CDATA[...]]>
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    RAW_TEXT = "raw_text"          # contents of <style> and friends


class QuoteKind(Enum):
    DOUBLE = '"'
    SINGLE = "'"
    UNQUOTED = ""
    EXPRESSION = "{"
    NONE = "none"                  # boolean attribute, no value at all


@dataclass(frozen=True)
class Attribute:
    """
    One attribute of a start tag.

    `value` is the text between the delimiters (inner text of quotes or of the
    expression braces); None for a boolean attribute. `value_start`/`value_end`
    span the value including its delimiters.
    """
    name: str
    value: Optional[str]
    quote: QuoteKind
    start: int
    end: int
    name_end: int
    value_start: int
    value_end: int

    @property
    def name_start(self) -> int:
        return self.start

    @property
    def is_boolean(self) -> bool:
        return self.quote is QuoteKind.NONE

    @property
    def is_expression(self) -> bool:
        return self.quote is QuoteKind.EXPRESSION


@dataclass(frozen=True)
class AttributeBlock:
    """A `{...}` group standing in attribute position (spread or comment)."""
    inner: str
    start: int
    end: int

    @property
    def is_spread(self) -> bool:
        return self.inner.startswith("...")

    @property
    def is_comment(self) -> bool:
        return _is_comment_body(self.inner)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int
    text: str
    # START_TAG / END_TAG only
    name: str = ""
    attributes: Sequence[Attribute] = field(default_factory=tuple)
    blocks: Sequence[AttributeBlock] = field(default_factory=tuple)
    self_closing: bool = False

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, pos={self.start})"


_NAME_STOP = frozenset(" \t\r\n\f=>/{")
_TAG_NAME_START_RE = re.compile(r"[A-Za-z_:]")
_COMMENT_BODY_RE = re.compile(r"\s*/\*.*\*/\s*", re.DOTALL)


def _is_comment_body(inner: str) -> bool:
    return _COMMENT_BODY_RE.fullmatch(inner) is not None


class _Lexer:
    def __init__(self, text: str, raw_text_elements: Sequence[str]):
        self.text = text
        self.n = len(text)
        self.raw_text_elements = frozenset(e.lower() for e in raw_text_elements)
        self.tokens: List[Token] = []

    # --- helpers -----------------------------------------------------------

    def _emit(self, kind: TokenKind, start: int, end: int, **kwargs) -> None:
        self.tokens.append(Token(kind, start, end, self.text[start:end], **kwargs))

    def _skip_ws(self, i: int) -> int:
        while i < self.n and self.text[i].isspace():
            i += 1
        return i

    def _find_or_end(self, needle: str, start: int) -> int:
        """End offset of `needle` searched from `start`, or end of input."""
        idx = self.text.find(needle, start)
        return self.n if idx == -1 else idx + len(needle)

    # --- main loop ---------------------------------------------------------

    def run(self) -> List[Token]:
        i = 0
        text_start = 0
        while i < self.n:
            ch = self.text[i]
            if ch == "{":
                scanned = scan_expression(self.text, i)
                if scanned is None:
                    i += 1  # fail open: literal brace
                    continue
                end, inner = scanned
                self._flush_text(text_start, i)
                kind = TokenKind.JSX_COMMENT if _is_comment_body(inner) else TokenKind.EXPRESSION
                self._emit(kind, i, end)
                i = text_start = end
            elif ch == "<":
                end = self._markup(i)
                if end is None:
                    i += 1
                    continue
                i = text_start = end
            else:
                i += 1
        self._flush_text(text_start, self.n)
        return self.tokens

    def _flush_text(self, start: int, end: int) -> None:
        if end > start:
            self._emit(TokenKind.TEXT, start, end)

    def _markup(self, i: int) -> Optional[int]:
        """Lex markup starting at '<'; returns the offset after it, or None for a stray '<'."""
        text = self.text
        rest = text[i + 1:i + 9]

        if rest.startswith("!--"):
            end = self._find_or_end("-->", i + 4)
            self._flush_pending(i)
            self._emit(TokenKind.COMMENT, i, end)
            return end
        if rest.startswith("![CDATA["):
            end = self._find_or_end("]]>", i + 9)
            self._flush_pending(i)
            self._emit(TokenKind.DECLARATION, i, end)
            return end
        if rest.startswith(("!", "?")):
            end = self._find_or_end(">", i + 2)
            self._flush_pending(i)
            self._emit(TokenKind.DECLARATION, i, end)
            return end
        if rest.startswith("/") and _TAG_NAME_START_RE.match(text, i + 2):
            end = self._find_or_end(">", i + 2)
            name_end = i + 2
            while name_end < end and text[name_end] not in _NAME_STOP:
                name_end += 1
            self._flush_pending(i)
            self._emit(TokenKind.END_TAG, i, end, name=text[i + 2:name_end])
            return end
        if _TAG_NAME_START_RE.match(text, i + 1):
            self._flush_pending(i)
            return self._start_tag(i)
        return None

    def _flush_pending(self, i: int) -> None:
        """Emit the text between the previous token and offset i."""
        prev_end = self.tokens[-1].end if self.tokens else 0
        self._flush_text(prev_end, i)

    # --- start tags --------------------------------------------------------

    def _read_name(self, i: int) -> int:
        while i < self.n and self.text[i] not in _NAME_STOP:
            i += 1
        return i

    def _start_tag(self, start: int) -> int:
        text = self.text
        name_end = self._read_name(start + 1)
        name = text[start + 1:name_end]
        attributes: List[Attribute] = []
        blocks: List[AttributeBlock] = []
        self_closing = False

        i = name_end
        while True:
            i = self._skip_ws(i)
            if i >= self.n:
                break
            ch = text[i]
            if ch == ">":
                i += 1
                break
            if ch == "/":
                if text.startswith("/>", i):
                    self_closing = True
                    i += 2
                    break
                i += 1
                continue
            if ch == "{":
                scanned = scan_expression(text, i)
                if scanned is None:
                    i += 1
                    continue
                end, inner = scanned
                blocks.append(AttributeBlock(inner, i, end))
                i = end
                continue
            if ch == "=":
                # value without a name; skip the stray '='
                i += 1
                continue
            i = self._attribute(i, attributes)

        end = i
        self._emit(
            TokenKind.START_TAG, start, end,
            name=name, attributes=tuple(attributes), blocks=tuple(blocks), self_closing=self_closing,
        )

        if not self_closing and name.lower() in self.raw_text_elements:
            end = self._raw_text(end, name)
        return end

    def _attribute(self, start: int, out: List[Attribute]) -> int:
        text = self.text
        name_end = self._read_name(start)
        name = text[start:name_end]

        j = self._skip_ws(name_end)
        if j >= self.n or text[j] != "=":
            out.append(Attribute(name, None, QuoteKind.NONE, start, name_end, name_end, name_end, name_end))
            return name_end

        v = self._skip_ws(j + 1)
        if v >= self.n:
            out.append(Attribute(name, "", QuoteKind.UNQUOTED, start, v, name_end, v, v))
            return v

        ch = text[v]
        if ch in ('"', "'"):
            close = text.find(ch, v + 1)
            if close == -1:
                close = self.n
                end = self.n
            else:
                end = close + 1
            quote = QuoteKind.DOUBLE if ch == '"' else QuoteKind.SINGLE
            out.append(Attribute(name, text[v + 1:close], quote, start, end, name_end, v, end))
            return end

        if ch == "{":
            scanned = scan_expression(text, v)
            if scanned is not None:
                end, inner = scanned
                out.append(Attribute(name, inner, QuoteKind.EXPRESSION, start, end, name_end, v, end))
                return end

        # unquoted value (also the fallback for an unbalanced '{')
        end = v
        while end < self.n and not text[end].isspace() and text[end] != ">" and not text.startswith("/>", end):
            end += 1
        out.append(Attribute(name, text[v:end], QuoteKind.UNQUOTED, start, end, name_end, v, end))
        return end

    def _raw_text(self, start: int, name: str) -> int:
        m = re.compile(r"</" + re.escape(name) + r"[\s>/]", re.IGNORECASE).search(self.text, start)
        end = m.start() if m else self.n
        if end > start:
            self._emit(TokenKind.RAW_TEXT, start, end, name=name)
        return end


def tokenize(text: str, raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS) -> List[Token]:
    """Split `text` into markup tokens; the concatenation of all token texts equals `text`."""
    return _Lexer(text, raw_text_elements).run()


def iter_start_tags(tokens: Sequence[Token]) -> Iterator[Token]:
    for tok in tokens:
        if tok.kind is TokenKind.START_TAG:
            yield tok
