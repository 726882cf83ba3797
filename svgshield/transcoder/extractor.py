"""
Expression extractor.

Forward: every brace-delimited expression the optimizer could not parse is
replaced by a placeholder frame:

  name={expr}          → name="PH(expr)"
  strokeWidth={2}      → left for the normalizer (camelCase policy only)
  >text {expr} text<   → >text PH(expr) text<
  <tag {...expr}>      → <tag data-spread-<n>="PH(expr)">
  <tag {/* note */}>   → <tag data-block-<n>="PH(/* note */)">
  <tag{...expr}>       → <tag data-spread-tight-<n>="PH(expr)">

A block glued to the previous token gets a separating space and `tight-`
before its index; one glued to the next token gets a trailing space and a
`-tight` suffix. The reverse pass drops exactly those spaces again.

Source text that already looks like a frame is escaped into a literal frame
so it does not come back as an expression.

Reverse: the same shapes are found in the optimizer's output and decoded back
into their brace form. JSX comments in text content are left as literal text.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, Union

from ..range_edits import RangeEditor
from ..types import EmbeddedExpression, ExpressionKind
from .lexer import (
    DEFAULT_RAW_TEXT_ELEMENTS,
    Attribute,
    AttributeBlock,
    QuoteKind,
    Token,
    TokenKind,
    tokenize,
)
from .attributes import JSX_TO_SVG_ATTRIBUTES, is_numeric_literal
from .placeholders import (
    FRAME_RE,
    LITERAL_PREFIX,
    LITERAL_RE,
    decode_payload_match,
    decode_placeholder,
    encode_literal,
    encode_placeholder,
)

__all__ = [
    "SPREAD_ATTRIBUTE_PREFIX",
    "BLOCK_ATTRIBUTE_PREFIX",
    "find_expressions",
    "keeps_numeric_literal",
    "extract_expressions",
    "restore_expressions",
]

logger = logging.getLogger(__name__)

SPREAD_ATTRIBUTE_PREFIX = "data-spread-"
BLOCK_ATTRIBUTE_PREFIX = "data-block-"
_TIGHT = "tight"

_SYNTHESIZED_RE = re.compile(r"data-(spread|block)-(tight-)?(\d+)(-tight)?")

_VALUE_QUOTES = (QuoteKind.DOUBLE, QuoteKind.SINGLE, QuoteKind.UNQUOTED)

# после блока пробел не нужен
_SELF_DELIMITED = frozenset(">/{")


def _tag_items(tok: Token) -> List[Union[Attribute, AttributeBlock]]:
    """Attributes and attribute-position blocks of a start tag in source order."""
    items: List[Union[Attribute, AttributeBlock]] = [*tok.attributes, *tok.blocks]
    items.sort(key=lambda item: item.start)
    return items


def _collect(tokens: Sequence[Token]) -> List[EmbeddedExpression]:
    found: List[EmbeddedExpression] = []
    for tok in tokens:
        if tok.kind is TokenKind.START_TAG:
            for item in _tag_items(tok):
                if isinstance(item, AttributeBlock):
                    if item.is_spread:
                        found.append(EmbeddedExpression(ExpressionKind.SPREAD, item.inner[3:], item.start))
                    else:
                        found.append(EmbeddedExpression(ExpressionKind.BLOCK, item.inner, item.start))
                elif item.is_expression:
                    found.append(EmbeddedExpression(ExpressionKind.ATTRIBUTE, item.value or "", item.value_start, item.name))
        elif tok.kind is TokenKind.EXPRESSION:
            found.append(EmbeddedExpression(ExpressionKind.TEXT, tok.text[1:-1], tok.start))
    return found


def find_expressions(
        fragment: str,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> List[EmbeddedExpression]:
    """List the embedded expressions of a fragment in source order."""
    return _collect(tokenize(fragment, raw_text_elements))


def keeps_numeric_literal(expr: EmbeddedExpression) -> bool:
    """
    True for `strokeWidth={2}`: a numeric literal on a camelCase spelling-map
    attribute, which the normalizer inlines as `stroke-width="2"`.
    """
    return (
        expr.kind is ExpressionKind.ATTRIBUTE
        and expr.attribute in JSX_TO_SVG_ATTRIBUTES
        and is_numeric_literal(expr.raw_text)
    )


def _value_offset(attr: Attribute) -> int:
    """Offset of the first character of the value text itself."""
    return attr.value_start + (0 if attr.quote is QuoteKind.UNQUOTED else 1)


def _escape_frames(editor: RangeEditor, tokens: Sequence[Token]) -> None:
    """Wrap frame-shaped source text (text content, attribute values) into literal frames."""
    for tok in tokens:
        if tok.kind is TokenKind.TEXT:
            spans = [(tok.start, m) for m in FRAME_RE.finditer(tok.text)]
        elif tok.kind is TokenKind.START_TAG:
            spans = [
                (_value_offset(attr), m)
                for attr in tok.attributes
                if attr.value is not None and attr.quote in _VALUE_QUOTES
                for m in FRAME_RE.finditer(attr.value)
            ]
        else:
            continue
        for base, m in spans:
            editor.add_replacement(base + m.start(), base + m.end(), encode_literal(m.group(0)), "literal")


def _synthesized(prefix: str, index: int, fragment: str, start: int, end: int, ph: str) -> str:
    glued_before = start > 0 and not fragment[start - 1].isspace()
    glued_after = end < len(fragment) and not fragment[end].isspace() and fragment[end] not in _SELF_DELIMITED
    name = f"{prefix}{_TIGHT + '-' if glued_before else ''}{index}{'-' + _TIGHT if glued_after else ''}"
    return f'{" " if glued_before else ""}{name}="{ph}"{" " if glued_after else ""}'


def extract_expressions(
        fragment: str,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
        keep_numeric: bool = False,
) -> str:
    """
    Replace every embedded expression with its placeholder.

    With keep_numeric, expressions accepted by keeps_numeric_literal() stay in
    brace form for the normalizer.
    """
    tokens = tokenize(fragment, raw_text_elements)
    editor = RangeEditor(fragment)
    _escape_frames(editor, tokens)
    spread_index = 0
    block_index = 0

    for expr in _collect(tokens):
        if keep_numeric and keeps_numeric_literal(expr):
            continue
        ph = encode_placeholder(expr.raw_text)
        if expr.kind is ExpressionKind.ATTRIBUTE:
            end = expr.position + len(expr.raw_text) + 2
            editor.add_replacement(expr.position, end, f'"{ph}"', "attribute")
        elif expr.kind is ExpressionKind.TEXT:
            end = expr.position + len(expr.raw_text) + 2
            editor.add_replacement(expr.position, end, ph, "text")
        elif expr.kind is ExpressionKind.SPREAD:
            end = expr.position + len(expr.raw_text) + 5
            text = _synthesized(SPREAD_ATTRIBUTE_PREFIX, spread_index, fragment, expr.position, end, ph)
            editor.add_replacement(expr.position, end, text, "spread")
            spread_index += 1
        else:
            end = expr.position + len(expr.raw_text) + 2
            text = _synthesized(BLOCK_ATTRIBUTE_PREFIX, block_index, fragment, expr.position, end, ph)
            editor.add_replacement(expr.position, end, text, "block")
            block_index += 1

    result, stats = editor.apply_edits()
    if stats["edits_applied"]:
        logger.debug("extracted expressions: %s", stats["edit_types"])
    return result


def _unescape_value(editor: RangeEditor, attr: Attribute) -> None:
    base = _value_offset(attr)
    for m in LITERAL_RE.finditer(attr.value or ""):
        decoded = decode_payload_match(m)
        if decoded is not None:
            editor.add_replacement(base + m.start(), base + m.end(), decoded, "literal")


def _restore_attribute(editor: RangeEditor, attr: Attribute, fragment: str) -> None:
    if attr.value is None or attr.quote not in _VALUE_QUOTES:
        return
    decoded = decode_placeholder(attr.value)
    if decoded is None:
        _unescape_value(editor, attr)
        return

    m = _SYNTHESIZED_RE.fullmatch(attr.name)
    if m is None:
        editor.add_replacement(attr.value_start, attr.value_end, "{" + decoded + "}", "attribute")
        return

    start, end = attr.start, attr.end
    # пробелы, вставленные вокруг «приклеенного» блока
    if m.group(2) and start > 0 and fragment[start - 1].isspace():
        start -= 1
    if m.group(4) and end < len(fragment) and fragment[end].isspace():
        end += 1
    if m.group(1) == "spread":
        editor.add_replacement(start, end, "{..." + decoded + "}", "spread")
    else:
        editor.add_replacement(start, end, "{" + decoded + "}", "block")


def _restore_text(editor: RangeEditor, tok: Token) -> None:
    for m in FRAME_RE.finditer(tok.text):
        decoded = decode_payload_match(m)
        if decoded is None:
            logger.debug("undecodable frame left in text at %d", tok.start + m.start())
            continue
        if m.group(0).startswith(LITERAL_PREFIX):
            editor.add_replacement(tok.start + m.start(), tok.start + m.end(), decoded, "literal")
        else:
            editor.add_replacement(tok.start + m.start(), tok.start + m.end(), "{" + decoded + "}", "text")


def restore_expressions(
        fragment: str,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> str:
    """
    Decode placeholders back into brace expressions and literal frames back
    into the text they carried.

    A frame whose payload does not decode is left untouched, as is a
    placeholder that only partially fills an attribute value.
    """
    editor = RangeEditor(fragment)
    for tok in tokenize(fragment, raw_text_elements):
        if tok.kind is TokenKind.START_TAG:
            for attr in tok.attributes:
                _restore_attribute(editor, attr, fragment)
        elif tok.kind is TokenKind.TEXT:
            _restore_text(editor, tok)

    result, _ = editor.apply_edits()
    return result
