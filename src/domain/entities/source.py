"""Domain entities describing a data feed and the outcome of fetching it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from .errors import FeedError
from .time_series import DataItem


class SourceFormat(str, Enum):
    """Wire format served by a feed."""

    TABULAR = "csv"
    HIERARCHICAL = "json"


@dataclass(frozen=True, slots=True)
class DataSource:
    """A feed location together with the format it serves."""

    format: SourceFormat
    url: str

    @classmethod
    def tabular(cls, url: str) -> "DataSource":
        return cls(SourceFormat.TABULAR, url)

    @classmethod
    def hierarchical(cls, url: str) -> "DataSource":
        return cls(SourceFormat.HIERARCHICAL, url)


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """Items parsed from a successful fetch."""

    items: List[DataItem]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """Classified error of a failed fetch."""

    error: FeedError

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = Union[FetchSuccess, FetchFailure]
