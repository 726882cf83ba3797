"""
Brace/quote balance scanner.

Finds the closing brace of an embedded expression. The scan is an explicit
state machine: inside a quoted string (single, double or backtick) or a JS
comment (`/* ... */`, `// ...` up to the end of the line) braces do not count
towards the nesting depth. A quote escaped with a backslash does not close
the string, and a quote inside a comment does not open one.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = ["ScanState", "find_closing_brace", "scan_expression"]


class ScanState(Enum):
    NORMAL = "normal"
    IN_SINGLE_QUOTE = "single"
    IN_DOUBLE_QUOTE = "double"
    IN_BACKTICK = "backtick"
    IN_BLOCK_COMMENT = "block_comment"
    IN_LINE_COMMENT = "line_comment"


_OPENING_QUOTES = {
    "'": ScanState.IN_SINGLE_QUOTE,
    '"': ScanState.IN_DOUBLE_QUOTE,
    "`": ScanState.IN_BACKTICK,
}

_CLOSING_QUOTE = {
    ScanState.IN_SINGLE_QUOTE: "'",
    ScanState.IN_DOUBLE_QUOTE: '"',
    ScanState.IN_BACKTICK: "`",
}


def find_closing_brace(text: str, start: int) -> Optional[int]:
    """
    Return the index of the brace closing an expression whose body starts at `start`.

    `start` points just past the opening `{`, so the depth counter is seeded
    at 1. Returns None when the input ends before the depth drops to zero.
    """
    state = ScanState.NORMAL
    depth = 1
    escaped = False
    i = start
    n = len(text)

    while i < n:
        ch = text[i]

        if state is ScanState.NORMAL:
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return i
            elif ch in _OPENING_QUOTES:
                state = _OPENING_QUOTES[ch]
            elif ch == "/" and text.startswith("/*", i):
                state = ScanState.IN_BLOCK_COMMENT
                i += 1
            elif ch == "/" and text.startswith("//", i):
                state = ScanState.IN_LINE_COMMENT
                i += 1
        elif state is ScanState.IN_BLOCK_COMMENT:
            if ch == "*" and text.startswith("*/", i):
                state = ScanState.NORMAL
                i += 1
        elif state is ScanState.IN_LINE_COMMENT:
            if ch == "\n":
                state = ScanState.NORMAL
        else:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == _CLOSING_QUOTE[state]:
                state = ScanState.NORMAL

        i += 1

    return None


def scan_expression(text: str, open_index: int) -> Optional[tuple[int, str]]:
    """
    Scan the `{...}` group whose opening brace sits at `open_index`.

    Returns (end, inner_text) where `end` is the index just past the closing
    brace, or None for an unbalanced group.
    """
    close = find_closing_brace(text, open_index + 1)
    if close is None:
        return None
    return close + 1, text[open_index + 1:close]
