"""Public interface for the Bitwarden export adapter."""

from __future__ import annotations

from .export import (
    ExportFormatError,
    VaultExport,
    default_output_path,
    load_export,
    parse_export,
    render_export,
    write_json,
)
from .schema import ExportEnvelope

__all__ = [
    "ExportEnvelope",
    "ExportFormatError",
    "VaultExport",
    "default_output_path",
    "load_export",
    "parse_export",
    "render_export",
    "write_json",
]
