from __future__ import annotations

from datetime import date

from src.domain.entities.time_series import Metric, Region
from src.domain.services.series_store import SeriesStore
from tests.conftest import make_item


def test_new_store_is_empty() -> None:
    store = SeriesStore(Metric.CONFIRMED)

    assert store.snapshot == ()
    assert store.time_slice is None
    assert store.updated_at is None
    assert store.truncated() == []


def test_update_sets_snapshot_and_default_time_slice() -> None:
    store = SeriesStore(Metric.DEATHS)
    store.update([make_item("A", [1, 2, 3]), make_item("B", [4, 5, 6])])

    assert len(store.snapshot) == 2
    assert store.time_slice == date(2020, 1, 23)
    assert store.updated_at is not None


def test_time_slice_survives_refresh() -> None:
    store = SeriesStore(Metric.CONFIRMED)
    store.update([make_item("A", [1, 2, 3])])
    store.select_time_slice(date(2020, 1, 22))

    store.update([make_item("A", [1, 2, 3, 4])])

    assert store.time_slice == date(2020, 1, 22)


def test_truncated_view_leaves_snapshot_intact() -> None:
    store = SeriesStore(Metric.CONFIRMED)
    store.update([make_item("A", [1, 2, 3])])

    at_slice = store.truncated()
    at_first_day = store.truncated(date(2020, 1, 22))

    assert [p.value for p in at_slice[0].points] == [1, 2]
    assert [p.value for p in at_first_day[0].points] == [1]
    assert [p.value for p in store.snapshot[0].points] == [1, 2, 3]


def test_find_by_region() -> None:
    store = SeriesStore(Metric.RECOVERED)
    store.update([make_item("A", [1]), make_item("B", [2], subdivision="X")])

    assert store.find(Region("B", "X")).last_value == 2
    assert store.find(Region("B")) is None
