"""Domain service helpers for parsing and ordering feed date labels."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.domain.entities.time_series import DataPoint

TABULAR_DATE_FORMAT = "%m/%d/%y %H:%M"
HIERARCHICAL_DATE_FORMAT = "%m/%d/%y"

_LABEL_TRIM = " \t\"'"


def _parse(label: str, fmt: str) -> Optional[datetime]:
    try:
        return datetime.strptime(label.strip(_LABEL_TRIM), fmt)
    except (TypeError, ValueError):
        return None


def parse_tabular_label(label: str) -> Optional[datetime]:
    """Parse a CSV header label such as ``01/22/20 12:00``."""
    return _parse(label, TABULAR_DATE_FORMAT)


def parse_history_key(key: str) -> Optional[datetime]:
    """Parse a JSON history key such as ``1/22/20``."""
    return _parse(key, HIERARCHICAL_DATE_FORMAT)


def order_points(stamped: Iterable[Tuple[datetime, int]]) -> Tuple[DataPoint, ...]:
    """
    Build a chronological point sequence from timestamped values.

    Values are ordered by their full timestamp and reduced to one point per
    calendar day; when a day occurs more than once the latest timestamp wins.
    """
    by_day: Dict[date, int] = {}
    for timestamp, value in sorted(stamped, key=lambda pair: pair[0]):
        by_day[timestamp.date()] = value
    return tuple(DataPoint(date=day, value=value) for day, value in by_day.items())


class DateIndex:
    """Positional index of the date columns of a tabular header.

    Every date column keeps its position even when its label does not parse,
    so value cells can still be paired with the right header cell.
    """

    def __init__(self, columns: Dict[int, Optional[datetime]]):
        self._columns = dict(columns)

    @classmethod
    def from_header(cls, header: Sequence[str], skip: Iterable[int] = ()) -> "DateIndex":
        skipped = set(skip)
        return cls(
            {
                position: parse_tabular_label(label)
                for position, label in enumerate(header)
                if position not in skipped
            }
        )

    @property
    def positions(self) -> List[int]:
        return sorted(self._columns)

    @property
    def unparsed_positions(self) -> List[int]:
        return sorted(pos for pos, stamp in self._columns.items() if stamp is None)

    def timestamp_at(self, position: int) -> Optional[datetime]:
        return self._columns.get(position)

    def __len__(self) -> int:
        return len(self._columns)
