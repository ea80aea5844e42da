"""
Infrastructure Parser - Hierarchical (JSON) feed

This module parses the location/history documents served by the
coronavirus-tracker API:

    {"latest": 100, "locations": [{"country": ..., "province": ...,
      "coordinates": {"lat": "..", "long": ".."},
      "history": {"1/22/20": 0, ...}}]}
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, List, Optional, Tuple

import structlog
from pydantic import ValidationError

from src.application.dtos.feed_dto import FeedDocumentDTO, FeedLocationDTO
from src.domain.entities.errors import MalformedDocumentError
from src.domain.entities.time_series import DataItem, Location, Region
from src.domain.services.date_index import order_points, parse_history_key
from src.shared import get_logger

logger = get_logger(__name__)


def _parse_degrees(value: Any, limit: float) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    try:
        degrees = float(value)
    except ValueError:
        return None
    if not math.isfinite(degrees) or abs(degrees) > limit:
        return None
    return degrees


def _to_item(location: FeedLocationDTO) -> DataItem:
    lat = _parse_degrees(location.coordinates.lat, 90.0)
    long = _parse_degrees(location.coordinates.long, 180.0)

    stamped: List[Tuple[datetime, int]] = []
    for key, value in location.history.items():
        timestamp = parse_history_key(key)
        if timestamp is not None:
            stamped.append((timestamp, value))

    return DataItem(
        region=Region(country=location.country, subdivision=location.province or ""),
        location=(
            Location(latitude=lat, longitude=long)
            if lat is not None and long is not None
            else None
        ),
        points=order_points(stamped),
    )


def parse_hierarchical(
    data: bytes, log: Optional[structlog.stdlib.BoundLogger] = None
) -> List[DataItem]:
    """
    Parse a location/history JSON payload into data items.

    Malformed locations are skipped; history keys that are not ``M/D/YY``
    dates are dropped.

    Raises:
        MalformedDocumentError: When the top-level document does not have
            ``latest`` and ``locations``.
    """
    log = log or logger
    try:
        document = FeedDocumentDTO.model_validate_json(data)
    except ValidationError as e:
        log.warning("hierarchical.document_invalid", errors=e.error_count())
        raise MalformedDocumentError(
            "Feed document does not match the location/history shape",
            details={"errors": e.errors(include_url=False)},
        ) from e

    items: List[DataItem] = []
    for index, raw_location in enumerate(document.locations):
        try:
            location = FeedLocationDTO.model_validate(raw_location)
        except ValidationError as e:
            log.debug(
                "hierarchical.location_skipped", index=index, errors=e.error_count()
            )
            continue
        items.append(_to_item(location))

    log.info("hierarchical.items_parsed", count=len(items), latest=document.latest)
    return items
