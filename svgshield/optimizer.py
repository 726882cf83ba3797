"""
Bridge to the XML optimizer.

The transcoder never optimizes anything itself; it hands prepared markup to
an `Optimizer`, any callable taking and returning an XML string. The CLI
drives an external command (SVGO by default) that reads the fragment on
stdin and writes the result to stdout.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import List, Protocol, runtime_checkable

from .config.model import OptimizerConfig
from .errors import OptimizerError

__all__ = ["Optimizer", "IdentityOptimizer", "CommandOptimizer", "build_optimizer"]

logger = logging.getLogger(__name__)


@runtime_checkable
class Optimizer(Protocol):
    def __call__(self, xml: str) -> str:
        ...


class IdentityOptimizer:
    """Returns its input; used for dry runs and round-trip checks."""

    def __call__(self, xml: str) -> str:
        return xml

    def __repr__(self) -> str:
        return "IdentityOptimizer()"


class CommandOptimizer:
    """
    Run an external optimizer once per fragment.

    The command line is split with shlex; the fragment is written to stdin as
    UTF-8 and stdout is the optimized markup.
    """

    def __init__(self, command: str, *, timeout: float = 30.0):
        self.argv: List[str] = shlex.split(command)
        if not self.argv:
            raise OptimizerError("Optimizer command is empty")
        self.timeout = timeout

    def __call__(self, xml: str) -> str:
        logger.debug("running optimizer: %s", " ".join(self.argv))
        try:
            proc = subprocess.run(
                self.argv,
                input=xml,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise OptimizerError(f"Optimizer executable not found: {self.argv[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise OptimizerError(f"Optimizer timed out after {self.timeout:g}s") from e

        if proc.returncode != 0:
            details = (proc.stderr or "").strip()
            raise OptimizerError(
                f"Optimizer exited with code {proc.returncode}" + (f": {details}" if details else "")
            )
        return proc.stdout

    def __repr__(self) -> str:
        return f"CommandOptimizer({shlex.join(self.argv)!r})"


def build_optimizer(cfg: OptimizerConfig, *, document: bool = False) -> Optimizer:
    """Optimizer for inline fragments, or with `document` for whole .svg files."""
    if cfg.identity:
        return IdentityOptimizer()
    command = (cfg.document_command or cfg.command) if document else cfg.command
    return CommandOptimizer(command, timeout=cfg.timeout)
