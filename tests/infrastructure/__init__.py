"""
Shared test infrastructure for svgshield.

Modules:
- file_utils: creating files and directories
- cli_utils: running the CLI in a subprocess
- fixtures: sample fragments shared by several test modules
"""

from .file_utils import write, read
from .cli_utils import run_cli, jload
from .fixtures import identity_round_trip

__all__ = ["write", "read", "run_cli", "jload", "identity_round_trip"]
