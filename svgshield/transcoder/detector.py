"""
Dialect detector: decides whether a fragment carries syntax an XML-only
optimizer cannot be trusted with.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from .attributes import JSX_TO_SVG_ATTRIBUTES, is_directive
from .lexer import DEFAULT_RAW_TEXT_ELEMENTS, Token, TokenKind, tokenize

__all__ = ["is_foreign", "foreign_reason"]

logger = logging.getLogger(__name__)

_LINE_COMMENT_RE = re.compile(r"^[ \t]*//", re.MULTILINE)


def _has_line_comment(fragment: str, tok: Token) -> bool:
    """`//` opening a source line; a token that starts mid-line (`<desc>//x`) does not count there."""
    at_line_start = tok.start == 0 or fragment[tok.start - 1] == "\n"
    for m in _LINE_COMMENT_RE.finditer(tok.text):
        if m.start() > 0 or at_line_start:
            return True
    return False


def _start_tag_reason(tok: Token) -> Optional[str]:
    if tok.blocks:
        block = tok.blocks[0]
        if block.is_spread:
            return "spread attribute"
        if block.is_comment:
            return "comment block"
        return "attribute-position expression"
    for attr in tok.attributes:
        if attr.is_expression:
            return f"expression value for '{attr.name}'"
        if attr.name == "className":
            return "className attribute"
        if attr.name in JSX_TO_SVG_ATTRIBUTES:
            return f"camelCase attribute '{attr.name}'"
        if is_directive(attr.name):
            return f"directive '{attr.name}'"
    return None


def foreign_reason(fragment: str, raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS) -> Optional[str]:
    """
    Return a short description of the first foreign-syntax signal, or None.

    Text inside raw-text elements (by default only <style>, where braces are
    CSS syntax) is not inspected.
    """
    for tok in tokenize(fragment, raw_text_elements):
        if tok.kind is TokenKind.START_TAG:
            reason = _start_tag_reason(tok)
            if reason:
                return reason
        elif tok.kind is TokenKind.JSX_COMMENT:
            return "comment block"
        elif tok.kind is TokenKind.EXPRESSION:
            return "text expression"
        elif tok.kind is TokenKind.TEXT and _has_line_comment(fragment, tok):
            return "line comment"
    return None


def is_foreign(fragment: str, raw_text_elements: Sequence[str] = DEFAULT_RAW_TEXT_ELEMENTS) -> bool:
    """True if the fragment contains foreign (template dialect) syntax."""
    reason = foreign_reason(fragment, raw_text_elements)
    if reason:
        logger.debug("foreign fragment: %s", reason)
    return reason is not None
