from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .transcoder.lexer import DEFAULT_RAW_TEXT_ELEMENTS


# -----------------------------
@dataclass(frozen=True)
class TransformOptions:
    """
    Policy for one forward/reverse transcoding cycle.

    The same options must be passed to both halves of the cycle.
    """
    # JSX spelling policy: className/camelCase attributes ↔ class/kebab-case
    use_camel_case: bool = True
    # Elements whose text content is never scanned for `{...}` expressions
    raw_text_elements: Tuple[str, ...] = DEFAULT_RAW_TEXT_ELEMENTS


DEFAULT_OPTIONS = TransformOptions()


@dataclass(frozen=True)
class PreparedFragment:
    """Result of the forward pass; `was_foreign` must be threaded to the reverse pass."""
    prepared_fragment: str
    was_foreign: bool


class ExpressionKind(Enum):
    ATTRIBUTE = "attribute"   # name={expr}
    TEXT = "text"             # >...{expr}...<
    SPREAD = "spread"         # {...expr}
    BLOCK = "block"           # any other {...} in an attribute list


@dataclass(frozen=True)
class EmbeddedExpression:
    kind: ExpressionKind
    raw_text: str
    position: int
    # attribute name for ATTRIBUTE expressions
    attribute: str = ""


# ---- Опции запуска optimize ----

@dataclass
class RunOptions:
    write: bool = False  # перезаписывать файлы результатом
    # Оптимизатор: команда из CLI перекрывает конфиг
    command: Optional[str] = None
    document_command: Optional[str] = None
    identity: bool = False
    # None → политика диалекта / конфига
    use_camel_case: Optional[bool] = None


__all__ = [
    "RunOptions",
    "TransformOptions",
    "DEFAULT_OPTIONS",
    "PreparedFragment",
    "ExpressionKind",
    "EmbeddedExpression",
]
