"""
Utilities for working with CLI in tests.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional


def run_cli(root: Path, *args: str, stdin: Optional[str] = None) -> subprocess.CompletedProcess:
    """
    Runs svgshield.cli with specified arguments in the given directory.

    Args:
        root: Working directory for command execution
        *args: Command line arguments for svgshield.cli
        stdin: Text fed to the process on stdin

    Returns:
        CompletedProcess with execution results
    """
    env = os.environ.copy()
    env.pop("SVGSHIELD_DEBUG", None)
    return subprocess.run(
        [sys.executable, "-m", "svgshield.cli", *args],
        cwd=root, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )


def jload(s: str):
    return json.loads(s)
