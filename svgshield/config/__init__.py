from .load import CONFIG_FILE_NAMES, find_config_file, load_config
from .model import Config, FilesConfig, OptimizerConfig, TranscoderConfig
from .typed import ConfigLoadError, load_typed

__all__ = [
    "Config",
    "TranscoderConfig",
    "OptimizerConfig",
    "FilesConfig",
    "ConfigLoadError",
    "CONFIG_FILE_NAMES",
    "find_config_file",
    "load_config",
    "load_typed",
]
