"""
Chart Data API Endpoints

Endpoints for candles and precomputed indicator series.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.schemas.bars import BarsQuery, BarsResponse, ErrorResponse, SeriesResponse
from app.services.bars import BarsService, get_bars_service

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorResponse, "description": "Invalid date, contract or data source"}}


def get_bars_query(
    contract: Optional[str] = Query(default=None, description="Contract identifier"),
    start: Optional[str] = Query(default=None, description="First day included (YYYY-MM-DD)"),
    end: Optional[str] = Query(default=None, description="Last day included (YYYY-MM-DD)"),
) -> BarsQuery:
    return BarsQuery(contract=contract, start=start, end=end)


@router.get("/bars", response_model=BarsResponse, responses=ERROR_RESPONSES)
async def get_bars(
    query: BarsQuery = Depends(get_bars_query),
    service: BarsService = Depends(get_bars_service),
):
    """
    Get candlestick bars for a contract and inclusive date range.

    Bars are ascending by time; rows missing any OHLC value are skipped.
    """
    return await service.execute(query)


@router.get("/series", response_model=SeriesResponse, responses=ERROR_RESPONSES)
async def get_series(
    query: BarsQuery = Depends(get_bars_query),
    service: BarsService = Depends(get_bars_service),
):
    """
    Get precomputed indicator series for a contract and inclusive date range.

    Series follow the configured catalog order; indicators missing from the
    dataset are omitted.
    """
    return await service.series(query)
