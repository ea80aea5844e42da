from __future__ import annotations

from datetime import date

import pytest

from src.domain.entities.time_series import DataItem, Region
from src.domain.services.statistics import (
    case_rates,
    default_time_slice,
    summarize_slice,
    timeline,
    total_of_latest,
)
from tests.conftest import make_item


def test_total_of_latest_sums_last_values() -> None:
    items = [make_item("A", [1, 5]), make_item("B", [2]), DataItem(region=Region("C"))]

    assert total_of_latest(items) == 7
    assert total_of_latest([]) == 0


def test_default_time_slice_is_second_to_last_date() -> None:
    assert default_time_slice([make_item("A", [1, 2, 3])]) == date(2020, 1, 23)
    assert default_time_slice([make_item("A", [1])]) == date(2020, 1, 22)
    assert default_time_slice([DataItem(region=Region("A"))]) is None
    assert default_time_slice([]) is None


def test_summarize_slice_compares_with_time_slice() -> None:
    items = [make_item("A", [1, 4, 9]), make_item("B", [2, 2, 5])]

    summary = summarize_slice(items, date(2020, 1, 22))

    assert summary is not None
    assert summary.total == 14
    assert summary.previous_total == 3
    assert summary.diff == 11
    assert summary.last_date == date(2020, 1, 24)
    assert summary.previous_date == date(2020, 1, 22)


def test_summarize_slice_without_slice_uses_previous_point() -> None:
    summary = summarize_slice([make_item("A", [1, 4, 9])])

    assert summary is not None
    assert summary.diff == 5


def test_summarize_slice_empty_snapshot() -> None:
    assert summarize_slice([], date(2020, 1, 22)) is None


def test_timeline_sums_per_day_newest_first() -> None:
    points = timeline([make_item("A", [1, 2]), make_item("B", [10, 20, 30])])

    assert [(p.date, p.value) for p in points] == [
        (date(2020, 1, 24), 30),
        (date(2020, 1, 23), 22),
        (date(2020, 1, 22), 11),
    ]


def test_case_rates() -> None:
    rates = case_rates(
        [make_item("A", [100])], [make_item("A", [10])], [make_item("A", [40])]
    )

    assert rates is not None
    assert rates.deaths == pytest.approx(0.1)
    assert rates.recovered == pytest.approx(0.4)


def test_case_rates_are_undefined_for_inconsistent_totals() -> None:
    assert case_rates([], [], []) is None
    assert (
        case_rates(
            [make_item("A", [10])], [make_item("A", [6])], [make_item("A", [6])]
        )
        is None
    )
