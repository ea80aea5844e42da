"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    DataNotFoundError,
    DomainError,
    ErrorKind,
    FeedError,
    MalformedDocumentError,
    ServiceCodeError,
    ServiceError,
    UnknownFeedError,
    UnknownSourceError,
)
from .source import DataSource, FetchFailure, FetchOutcome, FetchSuccess, SourceFormat
from .time_series import DataItem, DataPoint, Location, Metric, Region

__all__ = [
    "DataItem",
    "DataPoint",
    "Location",
    "Metric",
    "Region",
    "DataSource",
    "SourceFormat",
    "FetchSuccess",
    "FetchFailure",
    "FetchOutcome",
    "DomainError",
    "ErrorKind",
    "FeedError",
    "UnknownFeedError",
    "UnknownSourceError",
    "DataNotFoundError",
    "MalformedDocumentError",
    "ServiceError",
    "ServiceCodeError",
]
