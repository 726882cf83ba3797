"""
Attribute normalizer: JSX attribute spellings ↔ SVG attribute spellings.

Only exact attribute names produced by the lexer are rewritten, so prefixed
names such as `data-strokeWidth` are never touched.

A numeric literal on a camelCase attribute is inlined: `strokeWidth={2}`
becomes `stroke-width="2"` and comes back as `strokeWidth={2}`.

Spellings that the reverse mapping would otherwise misread are parked under
VERBATIM_PREFIX during normalization and restored verbatim by
denormalization: attributes already spelled `class` or `stroke-width` in the
source, and quoted numbers on camelCase attributes (`strokeWidth="2"`).
Names in a reserved XML namespace (`xlink:href`, `xml:space`, ...) are never
rewritten on the way in, so a literal `xlink:href` in a camelCase fragment
comes back as `xlinkHref`.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..range_edits import RangeEditor
from .attributes import (
    JSX_TO_SVG_ATTRIBUTES,
    RESERVED_NAMESPACE_PREFIXES,
    SVG_TO_JSX_ATTRIBUTES,
    VERBATIM_PREFIX,
    desanitize_name,
    is_numeric_literal,
    sanitize_name,
)
from .lexer import DEFAULT_RAW_TEXT_ELEMENTS, Attribute, QuoteKind, iter_start_tags, tokenize

__all__ = ["normalize_attributes", "denormalize_attributes"]

_JSX_CLASS = "className"
_SVG_CLASS = "class"

_LITERAL_QUOTES = (QuoteKind.DOUBLE, QuoteKind.SINGLE, QuoteKind.UNQUOTED)


def _has_numeric_literal(attr: Attribute) -> bool:
    return attr.quote in _LITERAL_QUOTES and attr.value is not None and is_numeric_literal(attr.value)


def _park(editor: RangeEditor, attr: Attribute) -> None:
    editor.add_replacement(attr.start, attr.name_end, VERBATIM_PREFIX + sanitize_name(attr.name), "verbatim")


def _normalize_one(editor: RangeEditor, attr: Attribute) -> None:
    name = attr.name
    if name == _JSX_CLASS:
        editor.add_replacement(attr.start, attr.name_end, _SVG_CLASS, "rename")
        return

    svg_name = JSX_TO_SVG_ATTRIBUTES.get(name)
    if svg_name is not None:
        if attr.is_expression and attr.value is not None and is_numeric_literal(attr.value):
            editor.add_replacement(attr.start, attr.end, f'{svg_name}="{attr.value}"', "numeric")
        elif _has_numeric_literal(attr):
            _park(editor, attr)
        else:
            editor.add_replacement(attr.start, attr.name_end, svg_name, "rename")
        return

    if name.startswith(RESERVED_NAMESPACE_PREFIXES):
        return
    if name == _SVG_CLASS or name in SVG_TO_JSX_ATTRIBUTES:
        _park(editor, attr)


def _denormalize_one(editor: RangeEditor, attr: Attribute) -> None:
    name = attr.name
    if name == _SVG_CLASS:
        editor.add_replacement(attr.start, attr.name_end, _JSX_CLASS, "rename")
        return

    jsx_name = SVG_TO_JSX_ATTRIBUTES.get(name)
    if jsx_name is not None:
        if _has_numeric_literal(attr):
            editor.add_replacement(attr.start, attr.end, f"{jsx_name}={{{attr.value}}}", "numeric")
        else:
            editor.add_replacement(attr.start, attr.name_end, jsx_name, "rename")
        return

    if name.startswith(VERBATIM_PREFIX):
        original: Optional[str] = desanitize_name(name[len(VERBATIM_PREFIX):])
        if original:
            editor.add_replacement(attr.start, attr.name_end, original, "verbatim")


def _rewrite(
        fragment: str,
        rewrite_one: Callable[[RangeEditor, Attribute], None],
        raw_text_elements: Sequence[str],
) -> str:
    editor = RangeEditor(fragment)
    for tok in iter_start_tags(tokenize(fragment, raw_text_elements)):
        for attr in tok.attributes:
            rewrite_one(editor, attr)
    result, _ = editor.apply_edits()
    return result


def normalize_attributes(
        fragment: str,
        use_camel_case: bool,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> str:
    """Rewrite JSX spellings to SVG spellings; a no-op unless use_camel_case is set."""
    if not use_camel_case:
        return fragment
    return _rewrite(fragment, _normalize_one, raw_text_elements)


def denormalize_attributes(
        fragment: str,
        use_camel_case: bool,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> str:
    """Exact inverse of normalize_attributes()."""
    if not use_camel_case:
        return fragment
    return _rewrite(fragment, _denormalize_one, raw_text_elements)
