from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run from an empty directory with no config file configured."""

    monkeypatch.delenv("VAULTDEDUP_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
