"""
Bars Service

CONTRACT:
    Input:  BarsQuery
    Output: BarsResponse / SeriesResponse

RESPONSIBILITIES:
    - Parse YYYY-MM-DD bounds into inclusive UTC windows
    - Filter the columnar dataset by contract and time range
    - Project and sort rows ascending by timestamp
    - Map rows to candles, dropping incomplete rows
    - Map precomputed indicator columns to chart series

READ ONLY - Nothing is written back to the data source.
"""

from app.services.bars.interface import BarsServiceInterface
from app.services.bars.service import BarsService, get_bars_service
from app.services.bars.sources import (
    BarsSource,
    DemoBarsSource,
    ParquetBarsSource,
    build_source,
)

__all__ = [
    "BarsServiceInterface",
    "BarsService",
    "get_bars_service",
    "BarsSource",
    "DemoBarsSource",
    "ParquetBarsSource",
    "build_source",
]
