"""
Forward/reverse entry points of the transcoder.

    fragment → detect → extract → normalize → protect → (optimizer)
             → unprotect → denormalize → restore → fragment

The reverse stages run in exactly the reverse order of the forward ones:
protected names are not spelling-map keys, so protection must be undone
before denormalization.
"""

from __future__ import annotations

from typing import Optional

from ..types import DEFAULT_OPTIONS, PreparedFragment, TransformOptions
from .detector import is_foreign
from .extractor import extract_expressions, restore_expressions
from .normalizer import denormalize_attributes, normalize_attributes
from .protector import protect_attributes, unprotect_attributes

__all__ = ["prepare_for_optimization", "finalize_after_optimization"]


def prepare_for_optimization(fragment: str, options: Optional[TransformOptions] = None) -> PreparedFragment:
    """
    Turn a fragment into XML an optimizer can process.

    Plain markup is returned unchanged with was_foreign=False.
    """
    opts = options or DEFAULT_OPTIONS
    raw = opts.raw_text_elements

    if not is_foreign(fragment, raw):
        return PreparedFragment(prepared_fragment=fragment, was_foreign=False)

    text = extract_expressions(fragment, raw, keep_numeric=opts.use_camel_case)
    text = normalize_attributes(text, opts.use_camel_case, raw)
    text = protect_attributes(text, raw)
    return PreparedFragment(prepared_fragment=text, was_foreign=True)


def finalize_after_optimization(
        optimized_fragment: str,
        was_foreign: bool,
        options: Optional[TransformOptions] = None,
) -> str:
    """
    Reconstruct the dialect syntax in the optimizer's output.

    With was_foreign=False the input is returned untouched.
    """
    if not was_foreign:
        return optimized_fragment

    opts = options or DEFAULT_OPTIONS
    raw = opts.raw_text_elements

    text = unprotect_attributes(optimized_fragment, raw)
    text = denormalize_attributes(text, opts.use_camel_case, raw)
    text = restore_expressions(text, raw)
    return text
