"""
Bars Service Interface

Defines the contract for the chart data layer.
"""

from abc import abstractmethod
from typing import Optional

from app.services.base import BaseService
from app.schemas.bars import (
    BarsQuery,
    BarsResponse,
    Candle,
    IndicatorSeries,
    SeriesResponse,
)


class BarsServiceInterface(BaseService[BarsQuery, BarsResponse]):
    """
    Bars Service Contract.

    INPUT: BarsQuery
        - contract: Optional contract identifier
        - start/end: Optional inclusive dates (YYYY-MM-DD, UTC)

    OUTPUT: BarsResponse / SeriesResponse
        - candles: OHLC bars ascending by time
        - series: Precomputed indicator lines in catalog order
    """

    @property
    def name(self) -> str:
        return "BarsService"

    @abstractmethod
    async def execute(self, input_data: BarsQuery) -> BarsResponse:
        """Load candles for the query."""
        pass

    @abstractmethod
    async def series(self, input_data: BarsQuery) -> SeriesResponse:
        """Load indicator series for the query."""
        pass

    @abstractmethod
    def load_bars(
        self,
        contract: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[Candle]:
        """
        Load candles filtered by contract and inclusive date range.

        Raises:
            InvalidDateError: Malformed start/end (before any data access)
            UnknownContractError: Contract rejected by the source
            SourceUnavailableError: Dataset missing or unreadable
            ColumnReadError: timestamp/OHLC column missing or not numeric
        """
        pass

    @abstractmethod
    def load_series(
        self,
        contract: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[IndicatorSeries]:
        """
        Load indicator series filtered like load_bars.

        Catalog columns absent from the source are skipped, not errors.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check that the data source can be located."""
        pass
