from __future__ import annotations

from pathlib import Path

import pytest

from vaultdedup.config.errors import InvalidPolicyError
from vaultdedup.config.settings import CliOverrides, resolve_settings
from vaultdedup.domain.policy import DEFAULT_POLICY_KEYS, KeepStrategy, Policy


pytestmark = pytest.mark.usefixtures("isolated_config")


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "custom.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_resolve_settings_defaults() -> None:
    settings = resolve_settings()

    assert settings.policy == Policy()
    assert settings.pretty is False
    assert settings.config_path is None


def test_config_file_values_apply(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [dedup]
        keep = "oldest"
        policy_keys = []

        [ignore]
        keys = ["id"]
        paths = ["notes"]

        [normalize]
        trim_strings = true

        [output]
        pretty = true
        """,
    )

    settings = resolve_settings(config_path=path)

    assert settings.config_path == path
    assert settings.pretty is True
    assert settings.policy.keep is KeepStrategy.OLDEST
    assert settings.policy.full_item_mode is True
    assert settings.policy.ignore_keys == frozenset({"id"})
    assert settings.policy.ignore_paths == frozenset({("notes",)})
    assert settings.policy.trim_strings is True


def test_cli_overrides_win_over_config(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [dedup]
        keep = "oldest"
        policy_keys = ["name"]

        [ignore]
        keys = ["id"]

        [normalize]
        sort_uris = true
        """,
    )
    overrides = CliOverrides(
        keep="newest",
        policy_keys=["username", "password"],
        ignore_keys=["revisionDate"],
        ignore_paths=["login.totp"],
        sort_uris=False,
        lowercase_strings=True,
    )

    policy = resolve_settings(overrides, config_path=path).policy

    assert policy.keep is KeepStrategy.NEWEST
    assert policy.policy_keys == ("username", "password")
    assert policy.ignore_keys == frozenset({"revisionDate"})
    assert policy.ignore_paths == frozenset({("login", "totp")})
    assert policy.sort_uris is False
    assert policy.lowercase_strings is True


def test_absent_switches_do_not_disable_config(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        "[normalize]\ntrim_strings = true\nsort_uris = false\n[output]\npretty = true\n",
    )

    settings = resolve_settings(CliOverrides(), config_path=path)

    assert settings.policy.trim_strings is True
    assert settings.policy.sort_uris is False
    assert settings.pretty is True


def test_empty_policy_key_override_selects_full_item_mode() -> None:
    settings = resolve_settings(CliOverrides(policy_keys=[]))

    assert settings.policy.full_item_mode is True


def test_unset_policy_key_override_keeps_defaults() -> None:
    settings = resolve_settings(CliOverrides(policy_keys=None))

    assert settings.policy.policy_keys == DEFAULT_POLICY_KEYS


def test_invalid_keep_override_is_rejected() -> None:
    with pytest.raises(InvalidPolicyError):
        resolve_settings(CliOverrides(keep="sometimes"))


def test_working_directory_config_is_picked_up(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text('[dedup]\nkeep = "last"\n', encoding="utf-8")

    settings = resolve_settings()

    assert settings.policy.keep is KeepStrategy.LAST
    assert settings.config_path == Path("config.toml")
