"""Application configuration helpers."""

from __future__ import annotations

from .env import CONFIG_PATH_ENV, config_path_from_env, optional_env_var
from .errors import ConfigFileError, ConfigurationError, InvalidPolicyError, OutputExistsError
from .logging import configure_logging

__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigFileError",
    "ConfigurationError",
    "InvalidPolicyError",
    "OutputExistsError",
    "config_path_from_env",
    "configure_logging",
    "optional_env_var",
]
