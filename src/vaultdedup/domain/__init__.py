"""Deduplication core: canonicalize, fingerprint, group, keep one."""

from __future__ import annotations

from .deduplication import DedupEngine, DedupReport, DedupResult, ReportEntry, deduplicate
from .fingerprint import Fingerprint, FingerprintComputer, fingerprint
from .paths import ABSENT, JsonValue
from .policy import KeepStrategy, Policy

__all__ = [
    "ABSENT",
    "DedupEngine",
    "DedupReport",
    "DedupResult",
    "Fingerprint",
    "FingerprintComputer",
    "JsonValue",
    "KeepStrategy",
    "Policy",
    "ReportEntry",
    "deduplicate",
    "fingerprint",
]
