"""Environment variable lookups for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

CONFIG_PATH_ENV: Final[str] = "VAULTDEDUP_CONFIG"


def optional_env_var(name: str) -> str | None:
    """Return the variable's value, treating unset and blank alike."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def config_path_from_env() -> Path | None:
    value = optional_env_var(CONFIG_PATH_ENV)
    return Path(value) if value else None
