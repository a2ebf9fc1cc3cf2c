"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class InvalidPolicyError(ConfigurationError):
    """Raised when a deduplication policy cannot be used."""


class ConfigFileError(ConfigurationError):
    """Raised when a config file is missing, unreadable or malformed."""


class OutputExistsError(ConfigurationError):
    """Raised when the output file exists and overwriting was not requested."""
