"""Domain services: pure computations over data item snapshots."""

from .aggregator import compute_active_cases
from .date_index import (
    DateIndex,
    order_points,
    parse_history_key,
    parse_tabular_label,
)
from .series_store import SeriesStore
from .statistics import (
    CaseRates,
    SliceSummary,
    case_rates,
    default_time_slice,
    summarize_slice,
    timeline,
    total_of_latest,
)

__all__ = [
    "compute_active_cases",
    "DateIndex",
    "order_points",
    "parse_history_key",
    "parse_tabular_label",
    "SeriesStore",
    "CaseRates",
    "SliceSummary",
    "case_rates",
    "default_time_slice",
    "summarize_slice",
    "timeline",
    "total_of_latest",
]
