"""
Trade Review Schema Contracts

JSON contracts between the backend and the chart frontend.
"""

from app.schemas.bars import (
    BarsQuery,
    BarsResponse,
    Candle,
    ErrorResponse,
    HealthResponse,
    IndicatorPane,
    IndicatorPoint,
    IndicatorSeries,
    SeriesKind,
    SeriesResponse,
)

__all__ = [
    # Requests
    "BarsQuery",
    # Responses
    "BarsResponse",
    "SeriesResponse",
    "HealthResponse",
    "ErrorResponse",
    # Chart data
    "Candle",
    "IndicatorPoint",
    "IndicatorSeries",
    "IndicatorPane",
    "SeriesKind",
]
