"""Application orchestration entry points."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from vaultdedup.adapters.bitwarden import (
    default_output_path,
    load_export,
    render_export,
    write_json,
)
from vaultdedup.config import OutputExistsError
from vaultdedup.domain import DedupEngine

if TYPE_CHECKING:
    from pathlib import Path

    from vaultdedup.config.settings import RunSettings
    from vaultdedup.domain import DedupReport


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DedupeExportResult:
    """Outcome of deduplicating one export file."""

    report: DedupReport
    output_path: Path
    written: bool
    report_path: Path | None = None


def dedupe_export(
    input_path: Path,
    *,
    settings: RunSettings,
    output_path: Path | None = None,
    report_path: Path | None = None,
    force: bool = False,
    dry_run: bool = False,
) -> DedupeExportResult:
    """Deduplicate ``input_path`` and write the surviving items.

    With ``dry_run`` nothing is written and an existing output file is not an
    error. Otherwise an existing output file is only replaced with ``force``.
    """

    target = output_path or default_output_path(input_path)
    if target.exists() and not force and not dry_run:
        raise OutputExistsError(f"Output file already exists: {target} (use --force to overwrite)")

    export = load_export(input_path)
    result = DedupEngine(settings.policy).run(export.items)
    report = result.report

    log.info("Items: %d -> %d (removed %d)", report.total, report.kept, report.removed)

    if dry_run:
        for entry in report.entries:
            log.info("Would keep item %d, remove %s", entry.kept, list(entry.discarded))
        return DedupeExportResult(report=report, output_path=target, written=False)

    write_json(target, render_export(export.with_items(result.items), pretty=settings.pretty))
    log.info("Wrote %s", target)

    if report_path is not None:
        write_json(report_path, json.dumps(report.to_dict(), indent=2))
        log.info("Wrote report %s", report_path)

    return DedupeExportResult(
        report=report, output_path=target, written=True, report_path=report_path
    )
