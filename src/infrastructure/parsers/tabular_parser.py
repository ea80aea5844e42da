"""
Infrastructure Parser - Tabular (CSV) feed

This module parses the wide-format CSV time series published by the JHU CSSE
repository: one row per region, four identifying columns followed by one
column per date.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import structlog

from src.domain.entities.time_series import DataItem, Location, Region
from src.domain.services.date_index import DateIndex, order_points
from src.shared import get_logger

SUBDIVISION_COLUMN = "Province/State"
COUNTRY_COLUMN = "Country/Region"
LATITUDE_COLUMN = "Lat"
LONGITUDE_COLUMN = "Long"
REQUIRED_COLUMNS = frozenset(
    {SUBDIVISION_COLUMN, COUNTRY_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN}
)

DELIMITER = ","
QUOTE = '"'
_TRIM = ' \t"'

logger = get_logger(__name__)


def split_row(row: str, delimiter: str = DELIMITER) -> List[str]:
    """
    Split a CSV row, keeping quoted delimiters inside their field.

    A field stays open while its quote count is odd. Quotes are kept in the
    returned fields; callers trim them.
    """
    columns: List[str] = []
    pending: Optional[str] = None
    for chunk in row.split(delimiter):
        if pending is not None:
            pending = pending + delimiter + chunk
            if pending.count(QUOTE) % 2 == 0:
                columns.append(pending)
                pending = None
        elif chunk.count(QUOTE) % 2 == 1:
            pending = chunk
        else:
            columns.append(chunk)
    if pending is not None:
        columns.append(pending)
    return columns


def _parse_degrees(value: str, limit: float) -> Optional[float]:
    try:
        degrees = float(value.strip(_TRIM))
    except ValueError:
        return None
    if not math.isfinite(degrees) or abs(degrees) > limit:
        return None
    return degrees


def parse_location(latitude: str, longitude: str) -> Optional[Location]:
    lat = _parse_degrees(latitude, 90.0)
    long = _parse_degrees(longitude, 180.0)
    if lat is None or long is None:
        return None
    return Location(latitude=lat, longitude=long)


def _parse_count(cell: str) -> Optional[int]:
    text = cell.strip(_TRIM)
    if not text:
        return 0
    try:
        count = int(float(text))
    except (ValueError, OverflowError):
        return None
    return count if count >= 0 else None


def _locate_columns(header: List[str]) -> Dict[str, int]:
    positions: Dict[str, int] = {}
    for position, name in enumerate(header):
        if name in REQUIRED_COLUMNS and name not in positions:
            positions[name] = position
    return positions


def _build_item(
    values: List[str], positions: Dict[str, int], dates: DateIndex
) -> DataItem:
    stamped: List[Tuple[datetime, int]] = []
    for position in dates.positions:
        if position >= len(values):
            break
        timestamp = dates.timestamp_at(position)
        if timestamp is None:
            continue
        count = _parse_count(values[position])
        if count is None:
            continue
        stamped.append((timestamp, count))

    return DataItem(
        region=Region(
            country=values[positions[COUNTRY_COLUMN]].strip(_TRIM),
            subdivision=values[positions[SUBDIVISION_COLUMN]].strip(_TRIM),
        ),
        location=parse_location(
            values[positions[LATITUDE_COLUMN]], values[positions[LONGITUDE_COLUMN]]
        ),
        points=order_points(stamped),
    )


def parse_tabular(
    data: bytes, log: Optional[structlog.stdlib.BoundLogger] = None
) -> List[DataItem]:
    """
    Parse a wide-format CSV payload into data items.

    Args:
        data: Raw payload bytes, UTF-8 encoded.
        log: Logger to report skipped content; defaults to the module logger.

    Returns:
        One item per data row, or an empty list when the header lacks a
        required column or the payload is not text.
    """
    log = log or logger
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        log.warning("tabular.decode_failed", error=str(e))
        return []

    rows = [row for row in text.splitlines() if row]
    if not rows:
        log.warning("tabular.empty_payload")
        return []

    header = [cell.strip(_TRIM) for cell in split_row(rows[0])]
    positions = _locate_columns(header)
    missing = REQUIRED_COLUMNS.difference(positions)
    if missing:
        log.warning("tabular.required_columns_missing", missing=sorted(missing))
        return []

    dates = DateIndex.from_header(header, skip=positions.values())
    if dates.unparsed_positions:
        log.debug("tabular.unparsed_date_columns", positions=dates.unparsed_positions)

    required_width = max(positions.values()) + 1
    items: List[DataItem] = []
    for line_number, row in enumerate(rows[1:], start=2):
        values = split_row(row)
        if len(values) < required_width:
            log.debug("tabular.row_skipped", line=line_number, columns=len(values))
            continue
        items.append(_build_item(values, positions, dates))

    log.info("tabular.items_parsed", count=len(items), date_columns=len(dates))
    return items
