"""
User-facing errors.

Anything the user can fix (a broken svgshield.yaml, an optimizer that is not
installed or exits with an error) derives from SvgShieldUserError; the CLI
prints the message without a traceback. Bugs propagate as ordinary
exceptions.

The transcoder core never raises these: malformed markup is passed through
unchanged.
"""

from __future__ import annotations


class SvgShieldUserError(Exception):
    """Base class for expected, user-fixable failures."""
    pass


class OptimizerError(SvgShieldUserError):
    """The external optimizer failed, timed out or could not be started."""
    pass


__all__ = ["SvgShieldUserError", "OptimizerError"]
