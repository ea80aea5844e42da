"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.use_cases.dashboard_use_cases import (
    GetTimeSliceUseCase,
    LoadDashboardUseCase,
)
from src.domain.entities.time_series import Metric
from src.domain.services.series_store import SeriesStore
from src.infrastructure.gateways.feed_gateway import FeedFetchCoordinator
from src.shared import get_logger

from .config import AppSettings, FeedSettings

logger = get_logger(__name__)


def _feed_source(feed: dict, metric: Metric):
    return FeedSettings(**feed).source_for(metric)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..application"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    confirmed_gateway = providers.Singleton(
        FeedFetchCoordinator,
        source=providers.Callable(_feed_source, config.feed, Metric.CONFIRMED),
        timeout=config.feed.timeout,
    )

    deaths_gateway = providers.Singleton(
        FeedFetchCoordinator,
        source=providers.Callable(_feed_source, config.feed, Metric.DEATHS),
        timeout=config.feed.timeout,
    )

    recovered_gateway = providers.Singleton(
        FeedFetchCoordinator,
        source=providers.Callable(_feed_source, config.feed, Metric.RECOVERED),
        timeout=config.feed.timeout,
    )

    feed_gateways = providers.Dict(
        {
            Metric.CONFIRMED: confirmed_gateway,
            Metric.DEATHS: deaths_gateway,
            Metric.RECOVERED: recovered_gateway,
        }
    )

    # Domain
    series_stores = providers.Singleton(
        lambda: {
            Metric.CONFIRMED: SeriesStore(Metric.CONFIRMED),
            Metric.DEATHS: SeriesStore(Metric.DEATHS),
            Metric.RECOVERED: SeriesStore(Metric.RECOVERED),
        }
    )

    # Application (use cases)
    load_dashboard_use_case = providers.Factory(
        LoadDashboardUseCase,
        gateways=feed_gateways,
        stores=series_stores,
    )

    get_time_slice_use_case = providers.Factory(
        GetTimeSliceUseCase,
        stores=series_stores,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for the feed gateways.

    Gateways are created lazily by the container; on exit every gateway is
    closed so no in-flight request outlives the application.
    """
    container = get_container()
    gateways = container.feed_gateways()

    try:
        logger.info("container.resources.initialized", feeds=len(gateways))
        yield container

    finally:
        for metric, gateway in gateways.items():
            logger.info("container.feed.close", metric=metric.value)
            gateway.close()

        logger.info("container.resources.shutdown")
