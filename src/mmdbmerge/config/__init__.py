"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_int, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .merge import DEFAULT_OUTPUT_FILENAME, MergeConfig, get_merge_config

__all__ = [
    "DEFAULT_OUTPUT_FILENAME",
    "ConfigurationError",
    "MergeConfig",
    "configure_logging",
    "env_flag",
    "env_int",
    "get_merge_config",
    "optional_env_var",
]
