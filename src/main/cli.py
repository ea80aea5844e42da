#!/usr/bin/env python3
"""
CLI Entry Point - Main Layer

This module serves as the command-line entry point. It initializes the
container, loads the three feeds once, derives active cases and prints the
dashboard summary.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from src.application.dtos.dashboard_dto import DashboardDTO
from src.main.config import AppSettings, FeedSettings, get_settings
from src.main.container import app_lifespan, init_container
from src.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ncov-tracker",
        description="Fetch COVID-19 feeds and summarize confirmed, deaths, "
        "recovered and active cases.",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "json"],
        help="Feed format; overrides FEED_FORMAT",
    )
    parser.add_argument("--base-url", help="Feed base URL; overrides FEED_BASE_URL")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full dashboard as JSON instead of a short summary",
    )
    return parser


def apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    feed_updates = {}
    if args.format:
        feed_updates["format"] = args.format
    if args.base_url:
        feed_updates["base_url"] = args.base_url
    if not feed_updates:
        return settings
    feed = FeedSettings(**{**settings.feed.model_dump(), **feed_updates})
    return settings.model_copy(update={"feed": feed})


def render_summary(dashboard: DashboardDTO) -> str:
    lines = []
    for metric in dashboard.metrics:
        line = f"{metric.metric.value:<10} regions={metric.item_count:<5} total={metric.total}"
        if metric.slice_summary is not None:
            line += f" change={metric.slice_summary.diff:+d}"
        if metric.error is not None:
            line += f" error={metric.error.kind.value}: {metric.error.message}"
        lines.append(line)
    lines.append(
        f"{'active':<10} regions={len(dashboard.active):<5} total={dashboard.active_total}"
    )
    if dashboard.rates is not None:
        lines.append(
            f"rates      deaths={dashboard.rates.deaths:.2%} "
            f"recovered={dashboard.rates.recovered:.2%}"
        )
    return "\n".join(lines)


async def run(settings: AppSettings) -> DashboardDTO:
    container = init_container(settings)
    async with app_lifespan():
        use_case = container.load_dashboard_use_case()
        return await use_case.execute()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for a one-shot dashboard load."""

    configure_logging()
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    update_logging_from_settings(settings)

    logger.info("cli.started", feed_format=settings.feed.format.value)
    dashboard = asyncio.run(run(settings))

    if args.json:
        print(dashboard.model_dump_json(indent=2))
    else:
        print(render_summary(dashboard))

    if len(dashboard.failed) == len(dashboard.metrics):
        logger.error("cli.all_feeds_failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
