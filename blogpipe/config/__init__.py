"""Configuration management for blogpipe."""

from .loader import Config, default_config_path, load_config, save_config
from .models import (
    ConfigModel,
    ContentStrategy,
    HttpConfig,
    LLMConfig,
    PostgresConfig,
    SearchConfig,
    SourceConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "ContentStrategy",
    "HttpConfig",
    "LLMConfig",
    "PostgresConfig",
    "SearchConfig",
    "SourceConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
