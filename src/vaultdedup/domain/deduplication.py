"""Deduplication engine: grouping, keeper selection and report assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from vaultdedup.domain.grouping import group_items
from vaultdedup.domain.keeper import select_keeper

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vaultdedup.domain.fingerprint import Fingerprint
    from vaultdedup.domain.paths import JsonValue
    from vaultdedup.domain.policy import Policy


log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReportEntry:
    """One duplicate group: the survivor and the discarded indices in input order."""

    fingerprint: Fingerprint
    kept: int
    discarded: tuple[int, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class DedupReport:
    total: int
    kept: int
    entries: tuple[ReportEntry, ...] = field(default_factory=tuple[ReportEntry, ...])

    @property
    def removed(self) -> int:
        return self.total - self.kept

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation of the report."""

        return {
            "total": self.total,
            "kept": self.kept,
            "removed": self.removed,
            "groups": {
                entry.fingerprint: {"kept": entry.kept, "discarded": list(entry.discarded)}
                for entry in self.entries
            },
        }


@dataclass(frozen=True, slots=True)
class DedupResult:
    items: list[JsonValue]
    report: DedupReport


def deduplicate(items: Sequence[JsonValue], policy: Policy) -> DedupResult:
    """Drop policy-equivalent duplicates from ``items``.

    Survivors are the original, unmodified items in their original relative
    order. The policy is validated before any item is looked at.
    """

    policy.validate()
    groups = group_items(items, policy)

    kept_indices: set[int] = set()
    entries: list[ReportEntry] = []
    for fingerprint, members in groups.items():
        keeper = select_keeper(members, policy.keep)
        kept_indices.add(keeper)
        if len(members) < 2:
            continue
        discarded = tuple(ref.index for ref in members if ref.index != keeper)
        entries.append(ReportEntry(fingerprint=fingerprint, kept=keeper, discarded=discarded))
        log.debug("Duplicate group %s: keep %d, discard %s", fingerprint[:12], keeper, discarded)

    survivors = [item for index, item in enumerate(items) if index in kept_indices]
    report = DedupReport(total=len(items), kept=len(survivors), entries=tuple(entries))
    return DedupResult(items=survivors, report=report)


@dataclass(frozen=True, slots=True)
class DedupEngine:
    """Bind a policy to :func:`deduplicate` for repeated runs."""

    policy: Policy

    def run(self, items: Sequence[JsonValue]) -> DedupResult:
        return deduplicate(items, self.policy)


__all__ = ["DedupEngine", "DedupReport", "DedupResult", "ReportEntry", "deduplicate"]
