from __future__ import annotations

import asyncio
from typing import Callable, List

import httpx
import pytest

from src.domain.entities.errors import (
    DataNotFoundError,
    ErrorKind,
    ServiceCodeError,
    ServiceError,
    UnknownFeedError,
    UnknownSourceError,
)
from src.domain.entities.source import DataSource, FetchFailure, FetchSuccess
from src.infrastructure.gateways.feed_gateway import FeedFetchCoordinator

JSON_URL = "https://feed.test/confirmed"
CSV_URL = "https://feed.test/confirmed.csv"


class _StubAsyncClient:
    def __init__(self, response: httpx.Response):
        self._response = response
        self.calls: List[str] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, *args, **kwargs):
        self.calls.append(url)
        return self._response


def _mock_client(handler: Callable) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_parses_hierarchical_feed(hierarchical_payload: bytes) -> None:
    client = _mock_client(lambda request: httpx.Response(200, content=hierarchical_payload))
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)

    items = await coordinator.fetch()

    assert [item.country for item in items] == ["Thailand", "Mainland China"]
    assert coordinator.in_flight is False
    await client.aclose()


@pytest.mark.asyncio
async def test_fetch_parses_tabular_feed(tabular_payload: bytes) -> None:
    client = _mock_client(lambda request: httpx.Response(200, content=tabular_payload))
    coordinator = FeedFetchCoordinator(DataSource.tabular(CSV_URL), client=client)

    items = await coordinator.fetch()

    assert len(items) == 3
    await client.aclose()


@pytest.mark.asyncio
async def test_default_client_is_created_per_request(
    monkeypatch, hierarchical_payload: bytes
) -> None:
    stub = _StubAsyncClient(httpx.Response(200, content=hierarchical_payload))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: stub)

    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), timeout=5.0)
    items = await coordinator.fetch()

    assert stub.calls == [JSON_URL]
    assert len(items) == 2


@pytest.mark.asyncio
async def test_concurrent_loads_share_one_request(hierarchical_payload: bytes) -> None:
    calls = 0
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        await release.wait()
        return httpx.Response(200, content=hierarchical_payload)

    client = _mock_client(handler)
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)
    received: List[tuple] = []

    coordinator.load(lambda outcome: received.append(("first", outcome)))
    coordinator.load(lambda outcome: received.append(("second", outcome)))
    waiting = asyncio.create_task(coordinator.fetch())
    await asyncio.sleep(0)

    assert coordinator.in_flight is True
    assert received == []

    release.set()
    items = await waiting

    assert calls == 1
    assert [name for name, _ in received] == ["first", "second"]
    assert received[0][1] is received[1][1]
    assert isinstance(received[0][1], FetchSuccess)
    assert received[0][1].items is items
    assert coordinator.in_flight is False
    await client.aclose()


@pytest.mark.asyncio
async def test_next_load_after_completion_fetches_again(
    hierarchical_payload: bytes,
) -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, content=hierarchical_payload)

    client = _mock_client(handler)
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)

    await coordinator.fetch()
    await coordinator.fetch()

    assert calls == 2
    await client.aclose()


@pytest.mark.asyncio
async def test_http_error_status_is_reported_with_code() -> None:
    client = _mock_client(lambda request: httpx.Response(503))
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)

    with pytest.raises(ServiceCodeError) as exc_info:
        await coordinator.fetch()

    assert exc_info.value.status_code == 503
    assert exc_info.value.description == "Service Unavailable"
    assert exc_info.value.kind is ErrorKind.SERVICE_CODE
    await client.aclose()


@pytest.mark.asyncio
async def test_transport_failure_wraps_underlying_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _mock_client(handler)
    coordinator = FeedFetchCoordinator(DataSource.tabular(CSV_URL), client=client)

    with pytest.raises(ServiceError) as exc_info:
        await coordinator.fetch()

    assert isinstance(exc_info.value.cause, httpx.ConnectError)
    await client.aclose()


@pytest.mark.asyncio
async def test_empty_body_is_unknown_failure() -> None:
    client = _mock_client(lambda request: httpx.Response(200, content=b""))
    coordinator = FeedFetchCoordinator(DataSource.tabular(CSV_URL), client=client)

    with pytest.raises(UnknownFeedError):
        await coordinator.fetch()
    await client.aclose()


@pytest.mark.asyncio
async def test_unrecognized_payload_is_data_not_found() -> None:
    client = _mock_client(
        lambda request: httpx.Response(200, content=b"a,b,c\n1,2,3\n")
    )
    coordinator = FeedFetchCoordinator(DataSource.tabular(CSV_URL), client=client)

    with pytest.raises(DataNotFoundError):
        await coordinator.fetch()
    await client.aclose()


@pytest.mark.asyncio
async def test_malformed_json_document_is_data_not_found() -> None:
    client = _mock_client(lambda request: httpx.Response(200, content=b'{"oops": 1}'))
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)
    outcomes: List = []
    done = asyncio.Event()

    def callback(outcome) -> None:
        outcomes.append(outcome)
        done.set()

    coordinator.load(callback)
    await done.wait()

    assert isinstance(outcomes[0], FetchFailure)
    assert outcomes[0].error.kind is ErrorKind.DATA_NOT_FOUND
    await client.aclose()


@pytest.mark.asyncio
async def test_malformed_source_url_fails_without_request() -> None:
    coordinator = FeedFetchCoordinator(DataSource.hierarchical("not a url"))
    outcomes: List = []

    coordinator.load(outcomes.append)

    assert coordinator.in_flight is False
    assert isinstance(outcomes[0].error, UnknownSourceError)
    with pytest.raises(UnknownSourceError):
        await coordinator.fetch()


@pytest.mark.asyncio
async def test_failing_callback_does_not_block_other_waiters(
    hierarchical_payload: bytes,
) -> None:
    client = _mock_client(lambda request: httpx.Response(200, content=hierarchical_payload))
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)

    def broken(outcome) -> None:
        raise ValueError("consumer bug")

    coordinator.load(broken)
    items = await coordinator.fetch()

    assert len(items) == 2
    await client.aclose()


@pytest.mark.asyncio
async def test_close_cancels_request_and_drops_waiters() -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.Event().wait()
        return httpx.Response(200)

    client = _mock_client(handler)
    coordinator = FeedFetchCoordinator(DataSource.hierarchical(JSON_URL), client=client)
    received: List = []

    coordinator.load(received.append)
    waiting = asyncio.create_task(coordinator.fetch())
    await started.wait()

    coordinator.close()

    with pytest.raises(asyncio.CancelledError):
        await waiting
    await asyncio.sleep(0)

    assert received == []
    assert coordinator.in_flight is False
    assert coordinator.closed is True
    with pytest.raises(RuntimeError):
        coordinator.load(received.append)
    await client.aclose()


@pytest.mark.asyncio
async def test_async_context_exit_closes_coordinator() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.Event().wait()
        return httpx.Response(200)

    client = _mock_client(handler)
    received: List = []

    async with FeedFetchCoordinator(
        DataSource.hierarchical(JSON_URL), client=client
    ) as coordinator:
        coordinator.load(received.append)
        await asyncio.sleep(0)

    assert coordinator.closed is True
    assert received == []
    await client.aclose()
