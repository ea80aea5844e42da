"""
Domain Gateway - Data Feed

This module defines the gateway interface for fetching and parsing one
epidemiological data feed.
"""

from abc import ABC, abstractmethod
from typing import Callable, List

from src.domain.entities.source import DataSource, FetchOutcome
from src.domain.entities.time_series import DataItem

FetchCallback = Callable[[FetchOutcome], None]


class IFeedGateway(ABC):
    """Interface for a feed gateway bound to a single source."""

    @property
    @abstractmethod
    def source(self) -> DataSource:
        """Source this gateway fetches; fixed at construction."""

    @abstractmethod
    def load(self, callback: FetchCallback) -> None:
        """
        Request the feed and deliver the outcome to ``callback``.

        Concurrent calls share one in-flight request; every registered
        callback receives the same outcome, in registration order.
        Must be called on the event loop that runs the gateway; code on
        other threads schedules it with ``loop.call_soon_threadsafe``.

        Args:
            callback: Invoked exactly once with the fetch outcome
        """
        pass

    @abstractmethod
    async def fetch(self) -> List[DataItem]:
        """
        Load the feed and wait for its items.

        Returns:
            Parsed data items

        Raises:
            FeedError: When the fetch fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Cancel any in-flight request; pending callbacks are dropped."""
        pass
