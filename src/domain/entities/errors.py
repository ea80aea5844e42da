"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from enum import Enum
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ErrorKind(str, Enum):
    """Classification of feed failures surfaced to consumers."""

    UNKNOWN = "unknown"
    UNKNOWN_SOURCE = "unknown_source"
    DATA_NOT_FOUND = "data_not_found"
    SERVICE = "service"
    SERVICE_CODE = "service_code"


class FeedError(DomainError):
    """Base class for errors raised while loading a data feed."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class UnknownFeedError(FeedError):
    """Raised when a feed failed without a more specific cause."""

    kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str = "Feed returned no data",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class UnknownSourceError(FeedError):
    """Raised when a feed URL cannot be used."""

    kind = ErrorKind.UNKNOWN_SOURCE

    def __init__(self, url: str, details: Optional[Dict[str, Any]] = None):
        self.url = url
        super().__init__(f"Malformed source URL: {url!r}", details)


class DataNotFoundError(FeedError):
    """Raised when a payload yields no recognizable items."""

    kind = ErrorKind.DATA_NOT_FOUND

    def __init__(
        self,
        message: str = "No data items found in feed payload",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class MalformedDocumentError(DataNotFoundError):
    """Raised when a hierarchical document does not have the expected shape."""


class ServiceError(FeedError):
    """Raised when the transport fails before a response is received."""

    kind = ErrorKind.SERVICE

    def __init__(self, cause: BaseException, details: Optional[Dict[str, Any]] = None):
        self.cause = cause
        super().__init__(f"Feed request failed: {cause}", details)


class ServiceCodeError(FeedError):
    """Raised when the feed answers with a non-success HTTP status."""

    kind = ErrorKind.SERVICE_CODE

    def __init__(
        self,
        status_code: int,
        description: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        self.description = description
        super().__init__(f"Feed HTTP error {status_code}: {description}", details)
