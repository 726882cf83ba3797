"""
Placeholder codec for extracted expressions.

Wire format: ``__JSX_BASE64__`` + base64(UTF-8 bytes of the expression) + ``__``.
The base64 alphabet contains no underscore, quote, angle bracket or
whitespace, so a frame is safe inside a quoted XML attribute and inside text
content, and its end is unambiguous.

Source text that already looks like a frame is carried in a literal frame
(``__JSX_LITERAL__`` + base64(text) + ``__``) which decodes back to the text
itself, never to a brace expression.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional

__all__ = [
    "PLACEHOLDER_PREFIX",
    "PLACEHOLDER_SUFFIX",
    "PLACEHOLDER_RE",
    "LITERAL_PREFIX",
    "LITERAL_RE",
    "FRAME_RE",
    "encode_placeholder",
    "decode_placeholder",
    "decode_payload_match",
    "contains_placeholder",
    "encode_literal",
]

PLACEHOLDER_PREFIX = "__JSX_BASE64__"
PLACEHOLDER_SUFFIX = "__"
LITERAL_PREFIX = "__JSX_LITERAL__"

_PAYLOAD = r"([A-Za-z0-9+/=]*)"

# Matches one frame anywhere in a string; group 1 is the base64 payload.
PLACEHOLDER_RE = re.compile(re.escape(PLACEHOLDER_PREFIX) + _PAYLOAD + re.escape(PLACEHOLDER_SUFFIX))
LITERAL_RE = re.compile(re.escape(LITERAL_PREFIX) + _PAYLOAD + re.escape(PLACEHOLDER_SUFFIX))
# Either kind of frame; source text matching this is escaped on the way in.
FRAME_RE = re.compile(
    "(?:" + re.escape(PLACEHOLDER_PREFIX) + "|" + re.escape(LITERAL_PREFIX) + ")"
    + _PAYLOAD + re.escape(PLACEHOLDER_SUFFIX)
)


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def encode_placeholder(expression: str) -> str:
    """Encode raw expression text into a placeholder frame."""
    return f"{PLACEHOLDER_PREFIX}{_b64(expression)}{PLACEHOLDER_SUFFIX}"


def encode_literal(text: str) -> str:
    """Wrap source text that looks like a frame so it survives verbatim."""
    return f"{LITERAL_PREFIX}{_b64(text)}{PLACEHOLDER_SUFFIX}"


def _decode_payload(payload: str) -> Optional[str]:
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        # UnicodeDecodeError is a ValueError
        return None


def decode_placeholder(value: str) -> Optional[str]:
    """
    Decode a string that is exactly one placeholder frame.

    Returns None if `value` is not a frame or its payload does not decode;
    such text may legitimately occur in the wild and is left alone by callers.
    """
    m = PLACEHOLDER_RE.fullmatch(value)
    if not m:
        return None
    return _decode_payload(m.group(1))


def contains_placeholder(value: str) -> bool:
    return PLACEHOLDER_RE.search(value) is not None


def decode_payload_match(m: re.Match[str]) -> Optional[str]:
    """Decode the payload of a PLACEHOLDER_RE or LITERAL_RE match."""
    return _decode_payload(m.group(1))
