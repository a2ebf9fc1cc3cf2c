"""Partition items into fingerprint groups while recording input order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from vaultdedup.domain.fingerprint import FingerprintComputer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vaultdedup.domain.fingerprint import Fingerprint
    from vaultdedup.domain.paths import JsonValue
    from vaultdedup.domain.policy import Policy

REVISION_FIELDS: Final[tuple[str, ...]] = ("revisionDate", "creationDate")

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ItemRef:
    """Position of an item in the input plus its revision timestamp, if any."""

    index: int
    revision: datetime | None = None


type Groups = dict[Fingerprint, list[ItemRef]]


def parse_timestamp(value: str) -> datetime | None:
    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        log.debug("Ignoring unparsable timestamp %r", value)
        return None
    # Left in its own offset: astimezone() overflows for instants near year 1 or 9999.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def revision_of(item: JsonValue) -> datetime | None:
    """Return ``revisionDate``, falling back to ``creationDate``."""

    if not isinstance(item, dict):
        return None
    for name in REVISION_FIELDS:
        value = item.get(name)
        if isinstance(value, str):
            parsed = parse_timestamp(value)
            if parsed is not None:
                return parsed
    return None


def group_items(items: Sequence[JsonValue], policy: Policy) -> Groups:
    """Group ``items`` by fingerprint; members keep their relative input order."""

    compute = FingerprintComputer(policy)
    groups: Groups = {}
    for index, item in enumerate(items):
        ref = ItemRef(index=index, revision=revision_of(item))
        groups.setdefault(compute(item), []).append(ref)
    return groups


__all__ = ["REVISION_FIELDS", "Groups", "ItemRef", "group_items", "parse_timestamp", "revision_of"]
