"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and its
callers, plus the wire shape of the hierarchical feed.
"""

from .dashboard_dto import (
    CaseRatesDTO,
    DashboardDTO,
    DataItemDTO,
    DataPointDTO,
    FeedErrorDTO,
    MetricSummaryDTO,
    SliceSummaryDTO,
    TimeSliceDTO,
)
from .feed_dto import FeedCoordinatesDTO, FeedDocumentDTO, FeedLocationDTO

__all__ = [
    "CaseRatesDTO",
    "DashboardDTO",
    "DataItemDTO",
    "DataPointDTO",
    "FeedErrorDTO",
    "MetricSummaryDTO",
    "SliceSummaryDTO",
    "TimeSliceDTO",
    "FeedCoordinatesDTO",
    "FeedDocumentDTO",
    "FeedLocationDTO",
]
