"""Summary figures computed over snapshots of data items."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from src.domain.entities.time_series import DataItem, DataPoint


@dataclass(frozen=True, slots=True)
class SliceSummary:
    """Latest total of a snapshot compared with its total as of a time slice."""

    total: int
    previous_total: int
    last_date: Optional[date]
    previous_date: Optional[date]

    @property
    def diff(self) -> int:
        return self.total - self.previous_total


@dataclass(frozen=True, slots=True)
class CaseRates:
    """Share of confirmed cases that ended in death or recovery."""

    deaths: float
    recovered: float


def total_of_latest(items: Sequence[DataItem]) -> int:
    """Sum of the last value of every item."""
    return sum(item.last_value for item in items)


def default_time_slice(items: Sequence[DataItem]) -> Optional[date]:
    """Second-to-last date of the first item, or its only date."""
    if not items or not items[0].points:
        return None
    return items[0].points[-2:][0].date


def summarize_slice(
    items: Sequence[DataItem], time_slice: Optional[date] = None
) -> Optional[SliceSummary]:
    """
    Compare the latest total with the total as of ``time_slice``.

    Without a time slice the comparison is against the previous point of
    every item. Returns None for an empty snapshot.
    """
    if not items:
        return None
    previous = [item.truncate(time_slice) for item in items]
    return SliceSummary(
        total=total_of_latest(items),
        previous_total=total_of_latest(previous),
        last_date=items[0].last_date,
        previous_date=previous[0].last_date,
    )


def timeline(items: Sequence[DataItem]) -> List[DataPoint]:
    """Per-day sum of values across all items, newest day first."""
    totals: Dict[date, int] = defaultdict(int)
    for item in items:
        for point in item.points:
            totals[point.date] += point.value
    return [
        DataPoint(date=day, value=totals[day])
        for day in sorted(totals, reverse=True)
    ]


def case_rates(
    confirmed: Sequence[DataItem],
    deaths: Sequence[DataItem],
    recovered: Sequence[DataItem],
) -> Optional[CaseRates]:
    """Deaths and recovered rates, or None when they would be meaningless."""
    total = total_of_latest(confirmed)
    total_deaths = total_of_latest(deaths)
    total_recovered = total_of_latest(recovered)
    if total <= 0 or total < total_deaths + total_recovered:
        return None
    return CaseRates(deaths=total_deaths / total, recovered=total_recovered / total)
