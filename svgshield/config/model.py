from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..transcoder.lexer import DEFAULT_RAW_TEXT_ELEMENTS

DEFAULT_OPTIMIZER_COMMAND = "svgo -i - -o -"


@dataclass
class TranscoderConfig:
    # None → политика диалекта (jsx: camelCase, остальные: нет)
    use_camel_case: Optional[bool] = None
    raw_text_elements: List[str] = field(default_factory=lambda: list(DEFAULT_RAW_TEXT_ELEMENTS))


@dataclass
class OptimizerConfig:
    command: str = DEFAULT_OPTIMIZER_COMMAND
    # для самостоятельных .svg-файлов; None → command
    document_command: Optional[str] = None
    # секунды на один фрагмент
    timeout: float = 30.0
    identity: bool = False


@dataclass
class FilesConfig:
    # None → все расширения из реестра диалектов
    extensions: Optional[List[str]] = None
    exclude: List[str] = field(default_factory=list)
    respect_gitignore: bool = True


@dataclass
class Config:
    transcoder: TranscoderConfig = field(default_factory=TranscoderConfig)
    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    files: FilesConfig = field(default_factory=FilesConfig)


__all__ = [
    "DEFAULT_OPTIMIZER_COMMAND",
    "TranscoderConfig",
    "OptimizerConfig",
    "FilesConfig",
    "Config",
]
