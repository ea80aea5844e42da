"""Domain entities for per-region epidemiological time series."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class Metric(str, Enum):
    """Kind of count carried by a series."""

    CONFIRMED = "confirmed"
    DEATHS = "deaths"
    RECOVERED = "recovered"
    ACTIVE = "active"


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single daily count."""

    date: date
    value: int


@dataclass(frozen=True, slots=True)
class Region:
    """Composite region key. An empty subdivision means a country aggregate."""

    country: str
    subdivision: str = ""


@dataclass(frozen=True, slots=True)
class Location:
    """Geographic position of a region, in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class DataItem:
    """
    One region's time series for one metric.

    Points are kept sorted ascending by date with at most one point per date.
    Items are immutable; ``truncate`` returns a new item.
    """

    region: Region
    location: Optional[Location] = None
    points: Tuple[DataPoint, ...] = field(default_factory=tuple)

    @property
    def country(self) -> str:
        return self.region.country

    @property
    def subdivision(self) -> str:
        return self.region.subdivision

    @property
    def last_point(self) -> Optional[DataPoint]:
        return self.points[-1] if self.points else None

    @property
    def last_value(self) -> int:
        return self.points[-1].value if self.points else 0

    @property
    def last_date(self) -> Optional[date]:
        return self.points[-1].date if self.points else None

    def truncate(self, at: Optional[date] = None) -> "DataItem":
        """
        Return a copy of the item cut at a time slice.

        Args:
            at: Keep only points dated on or before this day. When omitted,
                exactly the last point is dropped.

        Returns:
            A new DataItem; this item is left untouched.
        """
        if at is None:
            return replace(self, points=self.points[:-1])
        return replace(
            self, points=tuple(point for point in self.points if point.date <= at)
        )
