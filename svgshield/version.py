from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """Installed distribution version; `0.0.0` when running from a bare checkout."""
    try:
        return metadata.version("svgshield")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["tool_version"]
