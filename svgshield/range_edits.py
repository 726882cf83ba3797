"""
Offset-based splicing of markup.

Every transcoder stage lexes a fragment once, records the spans it wants
rewritten against that snapshot, and splices them all in a single pass at the
end. Offsets are character positions in the snapshot; they never shift while
edits are pending.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

__all__ = ["TextRange", "Edit", "RangeEditor"]


@dataclass(frozen=True)
class TextRange:
    """Half-open span `[start_char, end_char)` of the snapshot."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: {self.start_char} > {self.end_char}")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    @property
    def is_empty(self) -> bool:
        return self.start_char == self.end_char

    def overlaps(self, other: TextRange) -> bool:
        return self.start_char < other.end_char and other.start_char < self.end_char

    def strictly_contains(self, pos: int) -> bool:
        return self.start_char < pos < self.end_char


@dataclass(frozen=True)
class Edit:
    range: TextRange
    replacement: str
    # метка для счётчика edit_types в статистике
    type: Optional[str]

    @property
    def is_insertion(self) -> bool:
        return self.range.is_empty


class RangeEditor:
    """
    Collects non-overlapping edits of one snapshot.

    Conflicts are settled when an edit is added: a wider replacement evicts
    the narrower ones it overlaps, an equal or narrower one is dropped (first
    wins). Insertions strictly inside a replaced span are absorbed by it.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def _covered(self, pos: int) -> bool:
        return any(not e.is_insertion and e.range.strictly_contains(pos) for e in self.edits)

    def add_replacement(self, start_char: int, end_char: int, replacement: str, edit_type: Optional[str]) -> None:
        rng = TextRange(start_char, end_char)
        if rng.is_empty:
            self.add_insertion(start_char, replacement, edit_type)
            return

        evicted: List[Edit] = []
        for existing in self.edits:
            if existing.is_insertion:
                if rng.strictly_contains(existing.range.start_char):
                    evicted.append(existing)
            elif rng.overlaps(existing.range):
                if rng.length <= existing.range.length:
                    return
                evicted.append(existing)

        self.edits = [e for e in self.edits if not any(e is x for x in evicted)]
        self.edits.append(Edit(rng, replacement, edit_type))

    def add_deletion(self, start_char: int, end_char: int, edit_type: Optional[str]) -> None:
        self.add_replacement(start_char, end_char, "", edit_type)

    def add_insertion(self, position_char: int, content: str, edit_type: Optional[str]) -> None:
        """Insert at a position; insertions at one position keep their order."""
        if self._covered(position_char):
            return
        self.edits.append(Edit(TextRange(position_char, position_char), content, edit_type))

    def validate_edits(self) -> List[str]:
        limit = len(self.original_text)
        errors = []
        for i, e in enumerate(self.edits):
            if e.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({e.range.start_char}) is negative")
            if e.range.end_char > limit:
                errors.append(f"Edit {i}: end_char ({e.range.end_char}) exceeds text length ({limit})")
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Splice every pending edit into the snapshot.

        Returns the new text and a summary: `edits_applied`, `bytes_removed`,
        `bytes_added`, `bytes_saved` (UTF-8) and per-type counts in `edit_types`.
        """
        errors = self.validate_edits()
        if errors:
            raise ValueError("Edit validation failed: " + "; ".join(errors))

        text = self.original_text
        removed = added = 0
        types: Dict[str, int] = {}

        # по позиции; вставка раньше замены с тем же началом; затем порядок добавления
        order = sorted(
            range(len(self.edits)),
            key=lambda i: (self.edits[i].range.start_char, not self.edits[i].is_insertion, i),
        )
        out: List[str] = []
        cursor = 0
        for i in order:
            e = self.edits[i]
            out.append(text[cursor:e.range.start_char])
            out.append(e.replacement)
            removed += len(text[e.range.start_char:e.range.end_char].encode("utf-8"))
            added += len(e.replacement.encode("utf-8"))
            if e.type:
                types[e.type] = types.get(e.type, 0) + 1
            cursor = e.range.end_char
        out.append(text[cursor:])

        stats: Dict[str, Any] = {
            "edits_applied": len(self.edits),
            "bytes_removed": removed,
            "bytes_added": added,
            "bytes_saved": removed - added,
            "edit_types": types,
        }
        return "".join(out), stats
