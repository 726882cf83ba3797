from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import Config
from .typed import ConfigLoadError, load_typed

_yaml = YAML(typ="safe")

CONFIG_FILE_NAMES = ("svgshield.yaml", ".svgshield.yaml")

logger = logging.getLogger(__name__)


def find_config_file(root: Path) -> Optional[Path]:
    for name in CONFIG_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(root: Path) -> Config:
    """
    Load `svgshield.yaml` (or `.svgshield.yaml`) from the project root.

    A missing file yields the default configuration. Malformed YAML, unknown
    keys and values of the wrong type raise ConfigLoadError.
    """
    path = find_config_file(root)
    if path is None:
        logger.debug("no config file under %s, using defaults", root)
        return Config()

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigLoadError(f"{path.name}: invalid YAML: {e}") from e

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path.name}: YAML must be a mapping")

    cfg = load_typed(Config, raw, path=path.name)
    logger.debug("loaded config from %s", path)
    return cfg


__all__ = ["CONFIG_FILE_NAMES", "find_config_file", "load_config"]
