"""
Locating SVG fragments inside host documents.

A host document is arbitrary source text (a .tsx module, a .vue single-file
component, an HTML page). Only outermost `<svg ...>...</svg>` elements are
reported; nested `<svg>` elements belong to their enclosing fragment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .range_edits import RangeEditor
from .transcoder.scanner import scan_expression

__all__ = ["FragmentSpan", "find_fragments", "replace_fragments"]

_OPEN_RE = re.compile(r"<svg(?=[\s/>])")
_CLOSE_RE = re.compile(r"</svg\s*>")


@dataclass(frozen=True)
class FragmentSpan:
    start: int
    end: int
    text: str

    def line_in(self, document: str) -> int:
        """1-based line number of the fragment start."""
        return document.count("\n", 0, self.start) + 1


def _open_tag_end(text: str, i: int) -> Optional[Tuple[int, bool]]:
    """
    End of the start tag opened at `i` and whether it is self-closing.

    Quoted values and `{...}` groups are skipped whole, so `=>` inside an
    event handler does not end the tag.
    """
    n = len(text)
    j = i + 4
    while j < n:
        ch = text[j]
        if ch in ('"', "'"):
            close = text.find(ch, j + 1)
            if close == -1:
                return None
            j = close + 1
            continue
        if ch == "{":
            scanned = scan_expression(text, j)
            j = j + 1 if scanned is None else scanned[0]
            continue
        if ch == ">":
            return j + 1, text[j - 1] == "/"
        j += 1
    return None


def find_fragments(document: str) -> List[FragmentSpan]:
    """Outermost SVG elements of a document in source order."""
    spans: List[FragmentSpan] = []
    depth = 0
    start = 0
    pos = 0

    while True:
        m_open = _OPEN_RE.search(document, pos)
        m_close = _CLOSE_RE.search(document, pos)
        if m_close is None:
            break

        if m_open is not None and m_open.start() < m_close.start():
            tag = _open_tag_end(document, m_open.start())
            if tag is None:
                break
            end, self_closing = tag
            if not self_closing:
                if depth == 0:
                    start = m_open.start()
                depth += 1
            pos = end
            continue

        # закрывающий тег без открывающего игнорируем
        if depth > 0:
            depth -= 1
            if depth == 0:
                spans.append(FragmentSpan(start, m_close.end(), document[start:m_close.end()]))
        pos = m_close.end()

    return spans


def replace_fragments(document: str, replacements: Sequence[Tuple[FragmentSpan, str]]) -> str:
    """Splice rewritten fragments back into the document."""
    editor = RangeEditor(document)
    for span, new_text in replacements:
        if new_text != span.text:
            editor.add_replacement(span.start, span.end, new_text, "fragment")
    result, _ = editor.apply_edits()
    return result
