"""
Infrastructure Gateway - Data Feed Implementation

This module implements the feed gateway that downloads one data feed over
HTTP, parses it off the event loop and fans the outcome out to every caller
waiting on the same request.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Set

import httpx
import structlog

from src.domain.entities.errors import (
    DataNotFoundError,
    ServiceCodeError,
    ServiceError,
    UnknownFeedError,
    UnknownSourceError,
)
from src.domain.entities.source import (
    DataSource,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
)
from src.domain.entities.time_series import DataItem
from src.domain.gateways.feed_gateway import FetchCallback, IFeedGateway
from src.infrastructure.parsers import get_parser
from src.shared import get_logger


@dataclass
class _LoadCommand:
    task: asyncio.Task
    callbacks: List[FetchCallback] = field(default_factory=list)


class FeedFetchCoordinator(IFeedGateway):
    """
    Feed gateway that keeps at most one request in flight.

    ``load`` must be called from the event loop that runs the fetch. The
    in-flight record is only touched between awaits on that loop, so the
    check for a running request and the waiter registration cannot
    interleave.
    """

    def __init__(
        self,
        source: DataSource,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ):
        """
        Initialize the feed coordinator.

        Args:
            source: Feed URL and format; selects the parser
            timeout: Request timeout in seconds
            client: Shared HTTP client; a client per request is used if None
            logger: Logger for fetch lifecycle events
        """
        self._source = source
        self.timeout = timeout
        self._client = client
        self._parser = get_parser(source.format)
        self._logger = (logger or get_logger(__name__)).bind(
            source_url=source.url, source_format=source.format.value
        )
        self._command: Optional[_LoadCommand] = None
        self._waiters: Set[asyncio.Future] = set()
        self._closed = False

    @property
    def source(self) -> DataSource:
        return self._source

    @property
    def in_flight(self) -> bool:
        return self._command is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def load(self, callback: FetchCallback) -> None:
        if self._closed:
            raise RuntimeError("Feed coordinator has been closed")

        if self._command is not None:
            self._command.callbacks.append(callback)
            self._logger.debug(
                "feed.load_joined", waiters=len(self._command.callbacks)
            )
            return

        url = self._resolve_url()
        if url is None:
            self._logger.error("feed.unknown_source")
            callback(FetchFailure(UnknownSourceError(self._source.url)))
            return

        task = asyncio.get_running_loop().create_task(self._run(url))
        self._command = _LoadCommand(task=task, callbacks=[callback])
        self._logger.debug("feed.load_started")

    async def fetch(self) -> List[DataItem]:
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def _resolve(outcome: FetchOutcome) -> None:
            if not future.done():
                future.set_result(outcome)

        self._waiters.add(future)
        try:
            self.load(_resolve)
            outcome = await future
        finally:
            self._waiters.discard(future)

        if isinstance(outcome, FetchFailure):
            raise outcome.error
        return outcome.items

    def close(self) -> None:
        self._closed = True
        command, self._command = self._command, None
        if command is not None:
            command.task.cancel()
            self._logger.info(
                "feed.load_cancelled", dropped_waiters=len(command.callbacks)
            )
        for waiter in list(self._waiters):
            waiter.cancel()
        self._waiters.clear()

    async def __aenter__(self) -> "FeedFetchCoordinator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        command = self._command
        self.close()
        if command is not None:
            await asyncio.gather(command.task, return_exceptions=True)

    def _resolve_url(self) -> Optional[str]:
        try:
            url = httpx.URL(self._source.url)
        except (httpx.InvalidURL, TypeError):
            return None
        if url.scheme not in ("http", "https") or not url.host:
            return None
        return str(url)

    async def _run(self, url: str) -> None:
        outcome = await self._fetch_outcome(url)

        command, self._command = self._command, None
        if command is None or self._closed:
            return

        for callback in command.callbacks:
            try:
                callback(outcome)
            except Exception as e:
                self._logger.error("feed.callback_failed", error=str(e), exc_info=e)

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, follow_redirects=True)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, follow_redirects=True)

    async def _fetch_outcome(self, url: str) -> FetchOutcome:
        self._logger.info("feed.fetch_started")

        try:
            response = await self._get(url)
        except httpx.RequestError as e:
            self._logger.error("feed.request_failed", error=str(e))
            return FetchFailure(ServiceError(e))

        if not 200 <= response.status_code < 300:
            self._logger.error("feed.http_error", status_code=response.status_code)
            return FetchFailure(
                ServiceCodeError(response.status_code, response.reason_phrase)
            )

        payload = response.content
        if not payload:
            self._logger.warning("feed.empty_body", status_code=response.status_code)
            return FetchFailure(UnknownFeedError())

        try:
            items = await asyncio.to_thread(self._parser, payload, self._logger)
        except DataNotFoundError as e:
            return FetchFailure(e)
        except Exception as e:
            self._logger.error("feed.parse_failed", error=str(e), exc_info=e)
            return FetchFailure(UnknownFeedError(f"Feed parsing failed: {e}"))

        if not items:
            self._logger.warning("feed.data_not_found")
            return FetchFailure(DataNotFoundError(details={"url": url}))

        self._logger.info("feed.fetch_completed", count=len(items))
        return FetchSuccess(items)
