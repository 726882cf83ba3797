"""
Attribute protector.

Hides from the optimizer every attribute it must not interpret: attributes
whose value holds a placeholder and dialect directives (`v-bind:width`,
`@click`, `on:click`, `client:only`, ...). Each is renamed into the reserved
`data-svgshield-p-` namespace, which optimizers keep as an opaque data
attribute. Valueless directives get an explicit sentinel value so they are
not dropped and come back bare.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from ..range_edits import RangeEditor
from .attributes import (
    BOOLEAN,
    PlainAttribute,
    ProtectedAttribute,
    is_directive,
)
from .lexer import DEFAULT_RAW_TEXT_ELEMENTS, Attribute, QuoteKind, iter_start_tags, tokenize
from .placeholders import contains_placeholder

__all__ = ["classify_attribute", "protect_attributes", "unprotect_attributes"]

logger = logging.getLogger(__name__)


def _needs_protection(attr: Attribute) -> bool:
    if attr.value is not None and contains_placeholder(attr.value):
        return True
    return is_directive(attr.name)


def classify_attribute(attr: Attribute) -> Union[PlainAttribute, ProtectedAttribute]:
    """Decide the variant a lexed attribute takes on its way to the optimizer."""
    value = BOOLEAN if attr.value is None else attr.value
    if _needs_protection(attr):
        return ProtectedAttribute(attr.name, value)
    quote = attr.quote.value if attr.quote in (QuoteKind.DOUBLE, QuoteKind.SINGLE) else '"'
    return PlainAttribute(attr.name, value, quote)


def protect_attributes(
        fragment: str,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> str:
    """Rename eligible attributes into the protected namespace."""
    editor = RangeEditor(fragment)
    for tok in iter_start_tags(tokenize(fragment, raw_text_elements)):
        for attr in tok.attributes:
            variant = classify_attribute(attr)
            if not isinstance(variant, ProtectedAttribute):
                continue
            if variant.value is BOOLEAN:
                editor.add_replacement(attr.start, attr.end, f'{variant.wire_name}="{variant.wire_value}"', "boolean")
            else:
                editor.add_replacement(attr.start, attr.name_end, variant.wire_name, "protect")

    result, stats = editor.apply_edits()
    if stats["edits_applied"]:
        logger.debug("protected attributes: %s", stats["edit_types"])
    return result


def _parse_protected(attr: Attribute) -> Optional[ProtectedAttribute]:
    return ProtectedAttribute.from_wire(attr.name, attr.value)


def unprotect_attributes(
        fragment: str,
        raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS,
) -> str:
    """
    Restore protected attributes to their original names.

    A sentinel value turns back into a bare attribute; names that do not
    decode are left untouched.
    """
    editor = RangeEditor(fragment)
    for tok in iter_start_tags(tokenize(fragment, raw_text_elements)):
        for attr in tok.attributes:
            protected = _parse_protected(attr)
            if protected is None:
                continue
            if protected.value is BOOLEAN:
                editor.add_replacement(attr.start, attr.end, protected.original_name, "boolean")
            else:
                editor.add_replacement(attr.start, attr.name_end, protected.original_name, "unprotect")

    result, _ = editor.apply_edits()
    return result
