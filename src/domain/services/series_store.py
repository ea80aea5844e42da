"""Per-metric holder of the last successfully parsed snapshot."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Tuple

import structlog

from src.domain.entities.time_series import DataItem, Metric, Region
from src.domain.services.statistics import default_time_slice
from src.shared import get_logger


class SeriesStore:
    """
    Snapshot store for one metric.

    The snapshot is an immutable tuple that is swapped as a whole on every
    update, so readers always see a complete snapshot. Time-slice views are
    built from truncated copies and never touch the stored items.
    """

    def __init__(
        self, metric: Metric, logger: Optional[structlog.stdlib.BoundLogger] = None
    ):
        self.metric = metric
        self._logger = logger or get_logger(__name__)
        self._snapshot: Tuple[DataItem, ...] = ()
        self._time_slice: Optional[date] = None
        self._updated_at: Optional[datetime] = None

    @property
    def snapshot(self) -> Tuple[DataItem, ...]:
        return self._snapshot

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at

    @property
    def time_slice(self) -> Optional[date]:
        return self._time_slice

    def update(self, items: Iterable[DataItem]) -> None:
        """Replace the snapshot; the time slice defaults on first data."""
        self._snapshot = tuple(items)
        self._updated_at = datetime.now(timezone.utc)
        if self._time_slice is None:
            self._time_slice = default_time_slice(self._snapshot)
        self._logger.info(
            "series_store.updated",
            metric=self.metric.value,
            items=len(self._snapshot),
            time_slice=self._time_slice.isoformat() if self._time_slice else None,
        )

    def select_time_slice(self, day: Optional[date]) -> None:
        self._time_slice = day

    def find(self, region: Region) -> Optional[DataItem]:
        for item in self._snapshot:
            if item.region == region:
                return item
        return None

    def truncated(self, at: Optional[date] = None) -> List[DataItem]:
        """Snapshot as of ``at``, or as of the stored slice when omitted."""
        day = at if at is not None else self._time_slice
        return [item.truncate(day) for item in self._snapshot]
