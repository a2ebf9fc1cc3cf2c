"""Choose the surviving member of a duplicate group."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vaultdedup.domain.policy import KeepStrategy

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from vaultdedup.domain.grouping import ItemRef


def _age_key(ref: ItemRef) -> tuple[bool, datetime | None, int]:
    # Untimestamped refs compare below every timestamped one.
    return (ref.revision is not None, ref.revision, ref.index)


def select_keeper(group: Sequence[ItemRef], strategy: KeepStrategy) -> int:
    """Return the original index of the member to keep.

    ``newest`` and ``oldest`` order by revision timestamp; a member without one
    counts as older than any timestamped member. Ties fall back to ``last`` for
    ``newest`` and to ``first`` for ``oldest``.
    """

    if not group:
        raise ValueError("Cannot select a keeper from an empty group")

    match strategy:
        case KeepStrategy.FIRST:
            return min(ref.index for ref in group)
        case KeepStrategy.LAST:
            return max(ref.index for ref in group)
        case KeepStrategy.NEWEST:
            return max(group, key=_age_key).index
        case KeepStrategy.OLDEST:
            return min(group, key=_age_key).index


__all__ = ["select_keeper"]
