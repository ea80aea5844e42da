"""
Dashboard DTOs - Application Layer

This module defines Data Transfer Objects (DTOs) handed to presentation
consumers: snapshots, time-slice views and dashboard summaries.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.errors import ErrorKind, FeedError
from src.domain.entities.time_series import DataItem, DataPoint, Metric
from src.domain.services.statistics import CaseRates, SliceSummary


class DataPointDTO(BaseModel):
    """DTO for a daily count."""

    date: date
    value: int

    @classmethod
    def from_entity(cls, point: DataPoint) -> "DataPointDTO":
        return cls(date=point.date, value=point.value)


class DataItemDTO(BaseModel):
    """DTO for one region's series."""

    country: str = Field(description="Country or region")
    subdivision: str = Field(default="", description="Province or state")
    latitude: Optional[float] = Field(default=None, description="Latitude")
    longitude: Optional[float] = Field(default=None, description="Longitude")
    points: List[DataPointDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, item: DataItem) -> "DataItemDTO":
        return cls(
            country=item.country,
            subdivision=item.subdivision,
            latitude=item.location.latitude if item.location else None,
            longitude=item.location.longitude if item.location else None,
            points=[DataPointDTO.from_entity(point) for point in item.points],
        )


class FeedErrorDTO(BaseModel):
    """DTO for a classified feed failure."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_error(cls, error: FeedError) -> "FeedErrorDTO":
        return cls(kind=error.kind, message=error.message)


class SliceSummaryDTO(BaseModel):
    """DTO comparing the latest total with the total at a time slice."""

    total: int
    previous_total: int
    diff: int
    last_date: Optional[date] = None
    previous_date: Optional[date] = None

    @classmethod
    def from_entity(cls, summary: SliceSummary) -> "SliceSummaryDTO":
        return cls(
            total=summary.total,
            previous_total=summary.previous_total,
            diff=summary.diff,
            last_date=summary.last_date,
            previous_date=summary.previous_date,
        )


class CaseRatesDTO(BaseModel):
    """DTO for deaths and recovered rates over confirmed cases."""

    deaths: float = Field(ge=0.0, le=1.0)
    recovered: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_entity(cls, rates: CaseRates) -> "CaseRatesDTO":
        return cls(deaths=rates.deaths, recovered=rates.recovered)


class MetricSummaryDTO(BaseModel):
    """DTO for the state of one fetched metric after a load."""

    metric: Metric
    item_count: int
    total: int
    time_slice: Optional[date] = None
    slice_summary: Optional[SliceSummaryDTO] = None
    updated_at: Optional[datetime] = None
    error: Optional[FeedErrorDTO] = None


class DashboardDTO(BaseModel):
    """DTO for a complete dashboard load."""

    metrics: List[MetricSummaryDTO]
    active: List[DataItemDTO] = Field(default_factory=list)
    active_total: int = 0
    rates: Optional[CaseRatesDTO] = None
    loaded_at: datetime

    @property
    def failed(self) -> List[MetricSummaryDTO]:
        return [metric for metric in self.metrics if metric.error is not None]


class TimeSliceDTO(BaseModel):
    """DTO for one metric's snapshot viewed as of a time slice."""

    metric: Metric
    time_slice: Optional[date] = None
    items: List[DataItemDTO] = Field(default_factory=list)
    summary: Optional[SliceSummaryDTO] = None
    timeline: List[DataPointDTO] = Field(default_factory=list)
