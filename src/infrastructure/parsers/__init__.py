"""
Parsers Package - Infrastructure Layer

One pure parsing function per feed format, selected by ``get_parser``.
"""

from typing import Callable, Dict, List, Optional

import structlog

from src.domain.entities.source import SourceFormat
from src.domain.entities.time_series import DataItem

from .hierarchical_parser import parse_hierarchical
from .tabular_parser import parse_tabular, split_row

FeedParser = Callable[[bytes, Optional[structlog.stdlib.BoundLogger]], List[DataItem]]

PARSERS: Dict[SourceFormat, FeedParser] = {
    SourceFormat.TABULAR: parse_tabular,
    SourceFormat.HIERARCHICAL: parse_hierarchical,
}


def get_parser(source_format: SourceFormat) -> FeedParser:
    """Return the parsing function for a feed format."""
    return PARSERS[SourceFormat(source_format)]


__all__ = [
    "FeedParser",
    "PARSERS",
    "get_parser",
    "parse_hierarchical",
    "parse_tabular",
    "split_row",
]
