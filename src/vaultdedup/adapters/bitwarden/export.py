"""Reading and writing Bitwarden JSON exports."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError

from .schema import ExportEnvelope

if TYPE_CHECKING:
    from pathlib import Path

    from vaultdedup.domain.paths import JsonValue

OUTPUT_SUFFIX: Final[str] = ".dedup.json"

log = getLogger(__name__)


class ExportFormatError(ValueError):
    """Raised when a file is not a usable Bitwarden JSON export."""


@dataclass(frozen=True, slots=True)
class VaultExport:
    """A decoded export: the raw top-level object and its ``items`` list."""

    payload: dict[str, Any]
    items: list[JsonValue]

    def with_items(self, items: list[JsonValue]) -> VaultExport:
        """Return a copy whose ``items`` member is replaced, other members kept in order."""

        payload = dict(self.payload)
        payload["items"] = items
        return VaultExport(payload=payload, items=items)


def parse_export(text: str, *, source: str = "<string>") -> VaultExport:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ExportFormatError(f"Failed to parse JSON from {source}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ExportFormatError(f"Expected a JSON object at the top level of {source}")
    if payload.get("encrypted") is True:
        raise ExportFormatError(f"{source} is an encrypted export; export unencrypted JSON")

    if not isinstance(payload.get("items"), list):
        raise ExportFormatError(f"Expected top-level 'items' array in Bitwarden export {source}")

    try:
        envelope = ExportEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ExportFormatError(f"Invalid Bitwarden export {source}: {exc}") from exc

    log.debug("Loaded %d items from %s", len(envelope.items), source)
    return VaultExport(payload=payload, items=payload["items"])


def load_export(path: Path) -> VaultExport:
    text = path.read_text(encoding="utf-8")
    return parse_export(text, source=str(path))


def render_export(export: VaultExport, *, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(export.payload, indent=2, ensure_ascii=False)
    return json.dumps(export.payload, separators=(",", ":"), ensure_ascii=False)


def write_json(path: Path, text: str) -> None:
    # Unpaired surrogates only occur inside JSON strings, where "\uXXXX" is their escape.
    path.write_text(text, encoding="utf-8", errors="backslashreplace")


def default_output_path(input_path: Path) -> Path:
    """Return ``<stem>.dedup.json`` next to ``input_path``."""

    return input_path.with_name(f"{input_path.stem}{OUTPUT_SUFFIX}")
