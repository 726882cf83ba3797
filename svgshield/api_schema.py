"""
JSON report of `svgshield optimize`.

Field names are camelCase because the report is consumed by editor
integrations written in TypeScript.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

FORMAT_VERSION = 1


class OptimizeMode(Enum):
    # the whole file went to the optimizer as is
    document = "document"
    # SVG fragments were transcoded one by one
    inline = "inline"


class FragmentStatus(Enum):
    optimized = "optimized"
    unchanged = "unchanged"
    failed = "failed"


class Fragment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: int = Field(..., ge=0, description="Character offset of '<svg' in the document; 0 in document mode")
    end: int = Field(..., ge=0)
    line: int = Field(..., ge=1)
    foreign: bool = Field(..., description="Fragment carried template syntax")
    status: FragmentStatus
    originalBytes: int = Field(..., ge=0)
    optimizedBytes: int = Field(..., ge=0)
    savedBytes: int
    savedPct: float
    error: Optional[str] = None


class File(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str
    dialect: str
    mode: OptimizeMode
    useCamelCase: bool
    fragments: List[Fragment]
    originalBytes: int = Field(..., ge=0)
    optimizedBytes: int = Field(..., ge=0)
    written: bool = False


class Total(BaseModel):
    model_config = ConfigDict(extra="forbid")

    files: int = Field(..., ge=0)
    fragments: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    originalBytes: int = Field(..., ge=0)
    optimizedBytes: int = Field(..., ge=0)
    savedBytes: int
    savedPct: float
    message: str


class RunResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    formatVersion: int = FORMAT_VERSION
    optimizer: str
    documentOptimizer: str
    files: List[File]
    total: Total


__all__ = ["FORMAT_VERSION", "OptimizeMode", "FragmentStatus", "Fragment", "File", "Total", "RunResult"]
