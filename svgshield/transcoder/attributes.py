"""
Fixed attribute tables and the reversible attribute-name encoding.

Everything here is process-wide read-only data: the camelCase spelling map,
the directive prefixes of the supported dialects, the reserved XML namespace
prefixes and the character substitution table used to build protected names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

__all__ = [
    "JSX_TO_SVG_ATTRIBUTES",
    "SVG_TO_JSX_ATTRIBUTES",
    "DIRECTIVE_PREFIXES",
    "RESERVED_NAMESPACE_PREFIXES",
    "PROTECTED_PREFIX",
    "VERBATIM_PREFIX",
    "BOOLEAN_SENTINEL",
    "is_directive",
    "is_numeric_literal",
    "sanitize_name",
    "desanitize_name",
    "BooleanValue",
    "BOOLEAN",
    "PlainAttribute",
    "ProtectedAttribute",
]


# JSX camelCase attribute → SVG kebab-case / namespaced attribute
JSX_TO_SVG_ATTRIBUTES: Mapping[str, str] = MappingProxyType({
    # Stroke attributes
    "strokeWidth": "stroke-width",
    "strokeLinecap": "stroke-linecap",
    "strokeLinejoin": "stroke-linejoin",
    "strokeDasharray": "stroke-dasharray",
    "strokeDashoffset": "stroke-dashoffset",
    "strokeMiterlimit": "stroke-miterlimit",
    "strokeOpacity": "stroke-opacity",
    # Fill attributes
    "fillOpacity": "fill-opacity",
    "fillRule": "fill-rule",
    # Clip attributes
    "clipPath": "clip-path",
    "clipRule": "clip-rule",
    # Font attributes
    "fontFamily": "font-family",
    "fontSize": "font-size",
    "fontSizeAdjust": "font-size-adjust",
    "fontStretch": "font-stretch",
    "fontStyle": "font-style",
    "fontVariant": "font-variant",
    "fontWeight": "font-weight",
    # Text attributes
    "textAnchor": "text-anchor",
    "textDecoration": "text-decoration",
    "textRendering": "text-rendering",
    "dominantBaseline": "dominant-baseline",
    "alignmentBaseline": "alignment-baseline",
    "baselineShift": "baseline-shift",
    "letterSpacing": "letter-spacing",
    "wordSpacing": "word-spacing",
    "writingMode": "writing-mode",
    # Gradient/filter attributes
    "stopColor": "stop-color",
    "stopOpacity": "stop-opacity",
    "colorInterpolation": "color-interpolation",
    "colorInterpolationFilters": "color-interpolation-filters",
    "colorRendering": "color-rendering",
    "floodColor": "flood-color",
    "floodOpacity": "flood-opacity",
    "lightingColor": "lighting-color",
    # Marker attributes
    "markerStart": "marker-start",
    "markerMid": "marker-mid",
    "markerEnd": "marker-end",
    # Other attributes
    "paintOrder": "paint-order",
    "vectorEffect": "vector-effect",
    "shapeRendering": "shape-rendering",
    "imageRendering": "image-rendering",
    "pointerEvents": "pointer-events",
    # Namespaced attributes
    "xlinkHref": "xlink:href",
})

# Reverse map: SVG spelling → JSX spelling
SVG_TO_JSX_ATTRIBUTES: Mapping[str, str] = MappingProxyType(
    {svg: jsx for jsx, svg in JSX_TO_SVG_ATTRIBUTES.items()}
)

# Attribute name shapes that mark dialect directives
DIRECTIVE_PREFIXES: tuple[str, ...] = (
    # Vue
    "v-", ":", "@",
    # Svelte
    "on:", "bind:", "class:", "use:", "let:", "animate:", "transition:",
    "in:", "out:", "style:",
    # Astro
    "client:", "define:", "set:", "is:",
)

# Real XML namespaces; never directives even though they contain ':'
RESERVED_NAMESPACE_PREFIXES: tuple[str, ...] = ("xmlns:", "xlink:", "xml:", "sketch:")

# SVG 1.1 font attributes that look like Vue directives
_SVG_V_ATTRIBUTES = frozenset({"v-alphabetic", "v-hanging", "v-ideographic", "v-mathematical"})

PROTECTED_PREFIX = "data-svgshield-p-"
VERBATIM_PREFIX = "data-svgshield-k-"
BOOLEAN_SENTINEL = "__BOOLEAN__"


# JavaScript decimal literal: `2`, `-1.5`, `.5`, `1e3`
_NUMERIC_LITERAL_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_numeric_literal(text: str) -> bool:
    return _NUMERIC_LITERAL_RE.fullmatch(text) is not None


def is_directive(name: str) -> bool:
    """True if the attribute name is a dialect directive the optimizer must not interpret."""
    if name.startswith(RESERVED_NAMESPACE_PREFIXES):
        return False
    if name in _SVG_V_ATTRIBUTES:
        return False
    return name.startswith(DIRECTIVE_PREFIXES)


# ---------------------------------------------------------------------------
# Name sanitizing
# ---------------------------------------------------------------------------

_CHAR_MARKERS: Mapping[str, str] = MappingProxyType({
    ":": "COLON",
    "@": "AT",
    ".": "DOT",
    "_": "UNDERSCORE",
    "|": "PIPE",
    "#": "HASH",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "$": "DOLLAR",
})
_MARKER_CHARS: Mapping[str, str] = MappingProxyType({v: k for k, v in _CHAR_MARKERS.items()})

_SAFE_CHAR_RE = re.compile(r"[A-Za-z0-9-]")
_SANITIZED_RE = re.compile(r"(?:[A-Za-z0-9-]|__[A-Z0-9]+__)*")
_MARKER_RE = re.compile(r"__([A-Z0-9]+)__")
_CODEPOINT_RE = re.compile(r"U([0-9A-F]+)")


def sanitize_name(name: str) -> str:
    """
    Rewrite an attribute name into XML-name-safe characters.

    Every character outside [A-Za-z0-9-] becomes a `__MARKER__`; the
    underscore is escaped too, so every underscore of the result belongs to a
    marker and desanitize_name() inverts the mapping exactly.
    """
    out: list[str] = []
    for ch in name:
        if _SAFE_CHAR_RE.fullmatch(ch):
            out.append(ch)
        elif ch in _CHAR_MARKERS:
            out.append(f"__{_CHAR_MARKERS[ch]}__")
        else:
            out.append(f"__U{ord(ch):X}__")
    return "".join(out)


def desanitize_name(sanitized: str) -> Optional[str]:
    """Invert sanitize_name(); None if the text is not a well-formed sanitized name."""
    if not _SANITIZED_RE.fullmatch(sanitized):
        return None

    failed = False

    def _restore(m: re.Match[str]) -> str:
        nonlocal failed
        token = m.group(1)
        ch = _MARKER_CHARS.get(token)
        if ch is not None:
            return ch
        cp = _CODEPOINT_RE.fullmatch(token)
        if cp is not None:
            code = int(cp.group(1), 16)
            if code <= 0x10FFFF:
                return chr(code)
        failed = True
        return m.group(0)

    restored = _MARKER_RE.sub(_restore, sanitized)
    return None if failed else restored


# ---------------------------------------------------------------------------
# Attribute variants
# ---------------------------------------------------------------------------

class BooleanValue:
    """Value of a valueless (boolean) attribute."""

    _instance: Optional["BooleanValue"] = None

    def __new__(cls) -> "BooleanValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BOOLEAN"


BOOLEAN = BooleanValue()


@dataclass(frozen=True)
class PlainAttribute:
    """An attribute the optimizer may see and rewrite as ordinary markup."""
    name: str
    value: Union[str, BooleanValue]
    quote: str = '"'


@dataclass(frozen=True)
class ProtectedAttribute:
    """
    An attribute hidden from the optimizer under a reserved name.

    Serialized as PROTECTED_PREFIX + sanitize_name(original_name); a boolean
    attribute carries BOOLEAN_SENTINEL as its value on the wire.
    """
    original_name: str
    value: Union[str, BooleanValue]

    @property
    def wire_name(self) -> str:
        return PROTECTED_PREFIX + sanitize_name(self.original_name)

    @property
    def wire_value(self) -> str:
        return BOOLEAN_SENTINEL if self.value is BOOLEAN else self.value  # type: ignore[return-value]

    @classmethod
    def from_wire(cls, name: str, value: Optional[str]) -> Optional["ProtectedAttribute"]:
        """Parse a wire attribute; None if it does not carry a decodable protected name."""
        if not name.startswith(PROTECTED_PREFIX):
            return None
        original = desanitize_name(name[len(PROTECTED_PREFIX):])
        if not original:
            return None
        if value is None or value == BOOLEAN_SENTINEL:
            return cls(original, BOOLEAN)
        return cls(original, value)
