"""
Dashboard Use Cases - Application Layer

This module defines use cases for loading the confirmed, deaths and recovered
feeds, deriving the active-cases series and viewing snapshots as of a time
slice.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import Dict, Mapping, Optional

from dependency_injector.wiring import Provide, inject

from src.application.dtos.dashboard_dto import (
    CaseRatesDTO,
    DashboardDTO,
    DataItemDTO,
    DataPointDTO,
    FeedErrorDTO,
    MetricSummaryDTO,
    SliceSummaryDTO,
    TimeSliceDTO,
)
from src.domain.entities.errors import FeedError
from src.domain.entities.time_series import Metric
from src.domain.gateways.feed_gateway import IFeedGateway
from src.domain.services.aggregator import compute_active_cases
from src.domain.services.series_store import SeriesStore
from src.domain.services.statistics import (
    case_rates,
    summarize_slice,
    timeline,
    total_of_latest,
)
from src.shared import get_logger

logger = get_logger(__name__)

FETCHED_METRICS = (Metric.CONFIRMED, Metric.DEATHS, Metric.RECOVERED)


class LoadDashboardUseCase:
    """Use case for refreshing every feed and deriving active cases."""

    @inject
    def __init__(
        self,
        gateways: Mapping[Metric, IFeedGateway] = Provide["feed_gateways"],
        stores: Mapping[Metric, SeriesStore] = Provide["series_stores"],
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            gateways: Feed gateway per fetched metric
            stores: Snapshot store per fetched metric
        """
        self.gateways = gateways
        self.stores = stores

    async def _refresh(self, metric: Metric) -> Optional[FeedError]:
        try:
            items = await self.gateways[metric].fetch()
        except FeedError as e:
            logger.warning(
                "dashboard.feed_failed",
                metric=metric.value,
                kind=e.kind.value,
                error=e.message,
            )
            return e
        self.stores[metric].update(items)
        return None

    async def execute(self) -> DashboardDTO:
        """
        Load all feeds concurrently and summarize the resulting snapshots.

        A failed feed keeps its last successful snapshot; its error is
        reported in the returned metric summary.

        Returns:
            DashboardDTO: Per-metric summaries, active cases and rates
        """
        logger.info("dashboard.load_started")

        errors = await asyncio.gather(
            *(self._refresh(metric) for metric in FETCHED_METRICS)
        )
        failures: Dict[Metric, Optional[FeedError]] = dict(zip(FETCHED_METRICS, errors))

        confirmed = self.stores[Metric.CONFIRMED].snapshot
        deaths = self.stores[Metric.DEATHS].snapshot
        recovered = self.stores[Metric.RECOVERED].snapshot

        active = compute_active_cases(confirmed, deaths, recovered)
        rates = case_rates(confirmed, deaths, recovered)

        summaries = []
        for metric in FETCHED_METRICS:
            store = self.stores[metric]
            summary = summarize_slice(store.snapshot, store.time_slice)
            error = failures[metric]
            summaries.append(
                MetricSummaryDTO(
                    metric=metric,
                    item_count=len(store.snapshot),
                    total=total_of_latest(store.snapshot),
                    time_slice=store.time_slice,
                    slice_summary=SliceSummaryDTO.from_entity(summary)
                    if summary
                    else None,
                    updated_at=store.updated_at,
                    error=FeedErrorDTO.from_error(error) if error else None,
                )
            )

        logger.info(
            "dashboard.load_completed",
            failed=[metric.value for metric, error in failures.items() if error],
            active_regions=len(active),
        )

        return DashboardDTO(
            metrics=summaries,
            active=[DataItemDTO.from_entity(item) for item in active],
            active_total=total_of_latest(active),
            rates=CaseRatesDTO.from_entity(rates) if rates else None,
            loaded_at=datetime.now(timezone.utc),
        )


class GetTimeSliceUseCase:
    """Use case for viewing a metric's snapshot as of a chosen day."""

    @inject
    def __init__(
        self,
        stores: Mapping[Metric, SeriesStore] = Provide["series_stores"],
    ):
        self.stores = stores

    def execute(
        self, metric: Metric, at: Optional[date] = None, remember: bool = False
    ) -> TimeSliceDTO:
        """
        Build the truncated view of one metric without touching its snapshot.

        Args:
            metric: Fetched metric to view
            at: Day to cut at; the store's current slice when omitted
            remember: Store ``at`` as the metric's selected slice

        Returns:
            TimeSliceDTO: Truncated items, slice summary and timeline
        """
        if metric not in self.stores:
            raise ValueError(f"No snapshot is kept for metric {metric.value!r}")

        store = self.stores[metric]
        if remember:
            store.select_time_slice(at)
        day = at if at is not None else store.time_slice

        items = store.truncated(day)
        summary = summarize_slice(store.snapshot, day)

        logger.debug(
            "time_slice.built",
            metric=metric.value,
            time_slice=day.isoformat() if day else None,
            items=len(items),
        )

        return TimeSliceDTO(
            metric=metric,
            time_slice=day,
            items=[DataItemDTO.from_entity(item) for item in items],
            summary=SliceSummaryDTO.from_entity(summary) if summary else None,
            timeline=[DataPointDTO.from_entity(point) for point in timeline(items)],
        )
