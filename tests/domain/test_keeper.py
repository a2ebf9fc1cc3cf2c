from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from vaultdedup.domain.grouping import ItemRef
from vaultdedup.domain.keeper import select_keeper
from vaultdedup.domain.policy import KeepStrategy

T0 = datetime(2024, 1, 1, tzinfo=UTC)
T1 = T0 + timedelta(days=1)
T2 = T0 + timedelta(days=2)


@pytest.mark.parametrize(
    ("strategy", "expected"),
    [
        (KeepStrategy.FIRST, 0),
        (KeepStrategy.LAST, 2),
        (KeepStrategy.NEWEST, 2),
        (KeepStrategy.OLDEST, 0),
    ],
)
def test_select_keeper_with_ordered_timestamps(strategy: KeepStrategy, expected: int) -> None:
    group = [ItemRef(0, T0), ItemRef(1, T1), ItemRef(2, T2)]

    assert select_keeper(group, strategy) == expected


@pytest.mark.parametrize(
    ("strategy", "expected"),
    [
        (KeepStrategy.NEWEST, 1),
        (KeepStrategy.OLDEST, 0),
    ],
)
def test_missing_timestamp_counts_as_oldest(strategy: KeepStrategy, expected: int) -> None:
    group = [ItemRef(0, None), ItemRef(1, T1)]

    assert select_keeper(group, strategy) == expected


def test_newest_ignores_input_position() -> None:
    group = [ItemRef(0, T2), ItemRef(1, T0), ItemRef(2, None)]

    assert select_keeper(group, KeepStrategy.NEWEST) == 0
    assert select_keeper(group, KeepStrategy.OLDEST) == 2


def test_newest_tie_prefers_last() -> None:
    group = [ItemRef(0, T0), ItemRef(3, T2), ItemRef(5, T2), ItemRef(7, T1)]

    assert select_keeper(group, KeepStrategy.NEWEST) == 5


def test_oldest_tie_prefers_first() -> None:
    group = [ItemRef(1, T1), ItemRef(4, T0), ItemRef(6, T0)]

    assert select_keeper(group, KeepStrategy.OLDEST) == 4


def test_untimestamped_ties() -> None:
    group = [ItemRef(2, None), ItemRef(5, None)]

    assert select_keeper(group, KeepStrategy.NEWEST) == 5
    assert select_keeper(group, KeepStrategy.OLDEST) == 2


def test_singleton_group_selects_its_member() -> None:
    for strategy in KeepStrategy:
        assert select_keeper([ItemRef(9, None)], strategy) == 9


def test_empty_group_is_an_error() -> None:
    with pytest.raises(ValueError, match="empty group"):
        select_keeper([], KeepStrategy.FIRST)
