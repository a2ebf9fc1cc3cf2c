"""Merge CLI flags over the config file into one resolved run configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from vaultdedup.domain.policy import Policy

from .file import load_config_file, locate_config_path

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


@dataclass(frozen=True, slots=True, kw_only=True)
class CliOverrides:
    """Values given on the command line; ``None`` means "not given".

    Boolean switches that can only be turned on stay ``False`` when absent so
    they never switch off a value enabled in the config file.
    """

    keep: str | None = None
    policy_keys: Sequence[str] | None = None
    ignore_keys: Sequence[str] | None = None
    ignore_paths: Sequence[str] | None = None
    trim_strings: bool = False
    lowercase_strings: bool = False
    sort_uris: bool | None = None
    pretty: bool = False


@dataclass(frozen=True, slots=True)
class RunSettings:
    policy: Policy
    pretty: bool = False
    config_path: Path | None = None


def resolve_settings(
    overrides: CliOverrides | None = None,
    *,
    config_path: Path | None = None,
) -> RunSettings:
    """Return the effective settings: CLI flag, then config file, then defaults."""

    cli = overrides or CliOverrides()
    path = locate_config_path(config_path)
    config = load_config_file(path)

    policy = Policy.build(
        keep=cli.keep if cli.keep is not None else config.dedup.keep,
        policy_keys=_pick(cli.policy_keys, config.dedup.policy_keys),
        ignore_keys=_pick(cli.ignore_keys, config.ignore.keys),
        ignore_paths=_pick(cli.ignore_paths, config.ignore.paths),
        trim_strings=cli.trim_strings or config.normalize.trim_strings,
        lowercase_strings=cli.lowercase_strings or config.normalize.lowercase_strings,
        sort_uris=cli.sort_uris if cli.sort_uris is not None else config.normalize.sort_uris,
    )
    return RunSettings(policy=policy, pretty=cli.pretty or config.output.pretty, config_path=path)


def _pick(cli_value: Sequence[str] | None, configured: Sequence[str]) -> Sequence[str]:
    return cli_value if cli_value is not None else configured
