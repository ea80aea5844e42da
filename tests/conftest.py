from __future__ import annotations

import json
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import List

import pytest

from src.domain.entities.time_series import DataItem, DataPoint, Location, Region

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


TABULAR_PAYLOAD = (
    "Province/State,Country/Region,Lat,Long,01/22/20 12:00,01/23/20 12:00,01/24/20 12:00\n"
    "Anhui,Mainland China,31.8257,117.2264,1,9,15\n"
    ",Thailand,15,101,2,3,5\n"
    '"Some, Place",Country,1.0,2.0,5\n'
).encode("utf-8")


HIERARCHICAL_DOCUMENT = {
    "latest": 449,
    "locations": [
        {
            "country": "Thailand",
            "province": "",
            "coordinates": {"lat": "15", "long": "101"},
            "history": {"1/23/20": 3, "1/22/20": 2, "not-a-date": 7},
        },
        {
            "country": "Mainland China",
            "province": "Hubei",
            "coordinates": {"lat": "", "long": "112.2707"},
            "history": {"1/22/20": 444},
        },
        {"country": 5, "coordinates": {}},
    ],
}


@pytest.fixture()
def tabular_payload() -> bytes:
    return TABULAR_PAYLOAD


@pytest.fixture()
def hierarchical_payload() -> bytes:
    return json.dumps(HIERARCHICAL_DOCUMENT).encode("utf-8")


def make_item(
    country: str,
    values: List[int],
    subdivision: str = "",
    start: date = date(2020, 1, 22),
    location: Location | None = None,
) -> DataItem:
    return DataItem(
        region=Region(country=country, subdivision=subdivision),
        location=location,
        points=tuple(
            DataPoint(date=start + timedelta(days=offset), value=value)
            for offset, value in enumerate(values)
        ),
    )


@pytest.fixture()
def sample_item() -> DataItem:
    return make_item(
        "Thailand", [10, 20, 30], location=Location(latitude=15.0, longitude=101.0)
    )
