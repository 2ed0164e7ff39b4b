"""
CONTRACT: Chart Data

Input: BarsQuery
Output: BarsResponse / SeriesResponse

Chart-ready structures served to the frontend. Times are epoch seconds (UTC).
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class SeriesKind(str, Enum):
    LINE = "line"


class IndicatorPane(str, Enum):
    PRICE = "price"
    RSI = "rsi"
    ATR = "atr"


# =============================================================================
# INPUT: BarsQuery
# =============================================================================


class BarsQuery(BaseModel):
    """
    Request parameters shared by /bars and /series.
    Sent by: Frontend chart view
    Received by: Bars Service
    """

    contract: Optional[str] = Field(
        default=None,
        description="Contract identifier (e.g., 'CLZ4_ohlcv1m')",
    )
    start: Optional[str] = Field(
        default=None,
        description="First day included (YYYY-MM-DD, UTC)",
    )
    end: Optional[str] = Field(
        default=None,
        description="Last day included (YYYY-MM-DD, UTC)",
    )


# =============================================================================
# OUTPUT: Candles and Indicator Series
# =============================================================================


class Candle(BaseModel):
    """Single OHLC bar."""

    time: int = Field(..., description="Epoch seconds")
    open: float
    high: float
    low: float
    close: float


class IndicatorPoint(BaseModel):
    """Single sample of one indicator."""

    time: int = Field(..., description="Epoch seconds")
    value: float


class IndicatorSeries(BaseModel):
    """One precomputed indicator, ready to draw."""

    id: str = Field(..., description="Source column name")
    name: str = Field(..., description="Human-readable label")
    kind: SeriesKind = SeriesKind.LINE
    pane: IndicatorPane
    data: list[IndicatorPoint]


class BarsResponse(BaseModel):
    candles: list[Candle]

    class Config:
        json_schema_extra = {
            "example": {
                "candles": [
                    {
                        "time": 1729771800,
                        "open": 71.22,
                        "high": 71.32,
                        "low": 71.21,
                        "close": 71.25,
                    }
                ]
            }
        }


class SeriesResponse(BaseModel):
    series: list[IndicatorSeries]

    class Config:
        json_schema_extra = {
            "example": {
                "series": [
                    {
                        "id": "rsi_14_wilder",
                        "name": "RSI 14 WILDER",
                        "kind": "line",
                        "pane": "rsi",
                        "data": [{"time": 1729771800, "value": 54.2}],
                    }
                ]
            }
        }


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Client error payload."""

    message: str
