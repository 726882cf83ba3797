"""
Reversible transcoder for SVG markup embedded in template dialects.

Submodules are imported directly; the public entry points are re-exported by
the top-level package.
"""
