"""Domain service deriving the active-cases series from three snapshots."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Sequence

from src.domain.entities.time_series import DataItem, DataPoint, Region


def _latest_values(items: Sequence[DataItem]) -> Dict[Region, int]:
    return {item.region: item.last_value for item in items}


def compute_active_cases(
    confirmed: Sequence[DataItem],
    deaths: Sequence[DataItem],
    recovered: Sequence[DataItem],
    today: Optional[date] = None,
) -> List[DataItem]:
    """Derive active cases as confirmed - (deaths + recovered) per region.

    Only regions present in all three snapshots are emitted. Each derived item
    holds a single point dated at the confirmed item's last date (``today``
    when the confirmed item has no points). Values are not clamped, so lagging
    sources can produce negative counts.

    Args:
        confirmed: Confirmed-cases snapshot.
        deaths: Deaths snapshot.
        recovered: Recovered snapshot.
        today: Fallback date for confirmed items without points.

    Returns:
        Derived items in confirmed-snapshot order.
    """
    deaths_by_region = _latest_values(deaths)
    recovered_by_region = _latest_values(recovered)
    fallback_date = today or date.today()

    active: List[DataItem] = []
    for item in confirmed:
        death_value = deaths_by_region.get(item.region)
        recovered_value = recovered_by_region.get(item.region)
        if death_value is None or recovered_value is None:
            continue
        value = item.last_value - (death_value + recovered_value)
        active.append(
            DataItem(
                region=item.region,
                location=item.location,
                points=(DataPoint(date=item.last_date or fallback_date, value=value),),
            )
        )
    return active
