"""TOML configuration file schema and loader."""

from __future__ import annotations

import tomllib
from logging import getLogger
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vaultdedup.domain.policy import DEFAULT_IGNORE_KEYS, DEFAULT_POLICY_KEYS, KeepStrategy

from .env import config_path_from_env
from .errors import ConfigFileError

DEFAULT_CONFIG_PATH: Final[Path] = Path("config.toml")

log = getLogger(__name__)


class ConfigSection(BaseModel):
    model_config = ConfigDict(extra="forbid")


class DedupSection(ConfigSection):
    keep: KeepStrategy = KeepStrategy.FIRST
    policy_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_POLICY_KEYS))


class IgnoreSection(ConfigSection):
    keys: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_KEYS))
    paths: list[str] = Field(default_factory=list[str])


class NormalizeSection(ConfigSection):
    trim_strings: bool = False
    lowercase_strings: bool = False
    sort_uris: bool = True


class OutputSection(ConfigSection):
    pretty: bool = False


class ConfigFile(ConfigSection):
    """Contents of ``config.toml``; every table and key is optional."""

    dedup: DedupSection = Field(default_factory=DedupSection)
    ignore: IgnoreSection = Field(default_factory=IgnoreSection)
    normalize: NormalizeSection = Field(default_factory=NormalizeSection)
    output: OutputSection = Field(default_factory=OutputSection)


def locate_config_path(explicit: Path | None = None) -> Path | None:
    """Pick the config file to load.

    An explicit path or ``VAULTDEDUP_CONFIG`` must exist; the implicit
    ``./config.toml`` is used only when present.
    """

    requested = explicit or config_path_from_env()
    if requested is not None:
        if not requested.is_file():
            raise ConfigFileError(f"Config file not found: {requested}")
        return requested
    if DEFAULT_CONFIG_PATH.is_file():
        return DEFAULT_CONFIG_PATH
    return None


def parse_config(text: str, *, source: str = "<string>") -> ConfigFile:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(f"Failed to parse config file {source}: {exc}") from exc
    try:
        return ConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigFileError(f"Invalid config file {source}: {exc}") from exc


def load_config_file(path: Path | None) -> ConfigFile:
    """Load ``path``, or return defaults when no file is configured."""

    if path is None:
        return ConfigFile()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"Failed to read config file {path}: {exc}") from exc
    log.debug("Loading config from %s", path)
    return parse_config(text, source=str(path))
