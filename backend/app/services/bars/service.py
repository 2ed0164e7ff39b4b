"""
Bars Service Implementation

Filters, projects and maps columnar bar data into chart structures.
NO INDICATOR MATH - indicator columns are precomputed upstream.
"""

import asyncio
import logging
import math
from typing import Iterable, Optional, Sequence

import pyarrow as pa
import pyarrow.dataset as ds

from app.core.config import settings
from app.core.date_range import DateRange, millis_to_seconds, parse_range
from app.schemas.bars import (
    BarsQuery,
    BarsResponse,
    Candle,
    IndicatorPoint,
    IndicatorSeries,
    SeriesKind,
    SeriesResponse,
)
from app.services.base import ColumnReadError, SourceUnavailableError
from app.services.bars.indicators import classify_pane, indicator_label
from app.services.bars.interface import BarsServiceInterface
from app.services.bars.sources import BarsSource, build_source

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMN = "timestamp"
CONTRACT_COLUMN = "contract"
PRICE_COLUMNS = ("open", "high", "low", "close")


def _is_missing(value) -> bool:
    """Null, NaN and infinite values cannot be charted."""
    return value is None or not math.isfinite(value)


def _is_numeric(data_type: pa.DataType) -> bool:
    return pa.types.is_integer(data_type) or pa.types.is_floating(data_type)


def parse_candle(row: dict) -> Optional[Candle]:
    """
    Map one source row to a Candle.

    Returns None when the row is dropped: a missing timestamp or any
    null, NaN or infinite price. Missing prices are never defaulted.
    """
    timestamp = row.get(TIMESTAMP_COLUMN)
    if timestamp is None:
        return None
    prices = [row.get(column) for column in PRICE_COLUMNS]
    if any(_is_missing(price) for price in prices):
        return None
    open_, high, low, close = prices
    return Candle(
        time=millis_to_seconds(timestamp),
        open=open_,
        high=high,
        low=low,
        close=close,
    )


def parse_point(row: dict, column: str) -> Optional[IndicatorPoint]:
    """Map one row's indicator value to a point, or None if null, NaN or infinite."""
    timestamp = row.get(TIMESTAMP_COLUMN)
    value = row.get(column)
    if timestamp is None or _is_missing(value):
        return None
    return IndicatorPoint(time=millis_to_seconds(timestamp), value=value)


def _drop_duplicate_times(items: Iterable) -> list:
    """Keep the first item per second; input is already sorted by time."""
    unique = []
    last_time = None
    for item in items:
        if item.time == last_time:
            continue
        unique.append(item)
        last_time = item.time
    return unique


class BarsService(BarsServiceInterface):
    """
    Bars Service.

    Stateless per request: every call reopens the source, so concurrent
    requests share nothing but the read-only source handle.
    """

    def __init__(self, source: BarsSource, indicator_columns: Sequence[str]):
        self._source = source
        self._indicator_columns = tuple(indicator_columns)

    @property
    def name(self) -> str:
        return "BarsService"

    @property
    def source(self) -> BarsSource:
        return self._source

    async def execute(self, input_data: BarsQuery) -> BarsResponse:
        """Load candles for the query in a worker thread."""
        loop = asyncio.get_running_loop()
        candles = await loop.run_in_executor(
            None,
            lambda: self.load_bars(input_data.contract, input_data.start, input_data.end),
        )
        return BarsResponse(candles=candles)

    async def series(self, input_data: BarsQuery) -> SeriesResponse:
        """Load indicator series for the query in a worker thread."""
        loop = asyncio.get_running_loop()
        series = await loop.run_in_executor(
            None,
            lambda: self.load_series(input_data.contract, input_data.start, input_data.end),
        )
        return SeriesResponse(series=series)

    def load_bars(
        self,
        contract: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[Candle]:
        date_range = parse_range(start, end)
        dataset = self._source.open()

        timestamp = self._timestamp_ms(dataset.schema)
        for column in PRICE_COLUMNS:
            self._require_numeric(dataset.schema, column)

        predicate = self._build_filter(dataset.schema, contract, date_range, timestamp)
        rows = self._scan(dataset, predicate, timestamp, PRICE_COLUMNS)

        parsed = [parse_candle(row) for row in rows]
        candles = _drop_duplicate_times(c for c in parsed if c is not None)

        dropped = len(rows) - len(candles)
        if dropped:
            logger.debug(f"Dropped {dropped} incomplete or duplicate bar rows")
        logger.debug(
            f"Loaded {len(candles)} candles (contract={contract}, "
            f"start={date_range.start}, end={date_range.end})"
        )
        return candles

    def load_series(
        self,
        contract: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[IndicatorSeries]:
        date_range = parse_range(start, end)
        dataset = self._source.open()
        schema = dataset.schema

        timestamp = self._timestamp_ms(schema)
        predicate = self._build_filter(schema, contract, date_range, timestamp)

        columns = []
        for column in self._indicator_columns:
            if column not in schema.names:
                continue
            if not _is_numeric(schema.field(column).type):
                logger.warning(f"Skipping indicator '{column}': non-numeric type {schema.field(column).type}")
                continue
            columns.append(column)

        if not columns:
            logger.debug("No indicator columns present in source")
            return []

        rows = self._scan(dataset, predicate, timestamp, columns)

        series = []
        for column in columns:
            parsed = (parse_point(row, column) for row in rows)
            series.append(
                IndicatorSeries(
                    id=column,
                    name=indicator_label(column),
                    kind=SeriesKind.LINE,
                    pane=classify_pane(column),
                    data=_drop_duplicate_times(p for p in parsed if p is not None),
                )
            )

        logger.debug(
            f"Loaded {len(series)} indicator series over {len(rows)} rows "
            f"(contract={contract}, start={date_range.start}, end={date_range.end})"
        )
        return series

    async def health_check(self) -> bool:
        """Source is healthy if it can be located."""
        return self._source.exists()

    # -------------------------------------------------------------------------
    # Scan pipeline
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_numeric(schema: pa.Schema, column: str) -> None:
        if column not in schema.names or not _is_numeric(schema.field(column).type):
            raise ColumnReadError(column)

    @staticmethod
    def _timestamp_ms(schema: pa.Schema) -> ds.Expression:
        """
        Expression reading the timestamp column as int64 epoch milliseconds.

        Integer and floating columns already hold milliseconds; Arrow
        timestamp columns of any unit are converted to milliseconds first.
        """
        if TIMESTAMP_COLUMN not in schema.names:
            raise ColumnReadError(TIMESTAMP_COLUMN)
        data_type = schema.field(TIMESTAMP_COLUMN).type
        field = ds.field(TIMESTAMP_COLUMN)
        if pa.types.is_timestamp(data_type):
            millis = field.cast(pa.timestamp("ms", tz=data_type.tz), safe=False)
            return millis.cast(pa.int64())
        if _is_numeric(data_type):
            return field.cast(pa.int64())
        raise ColumnReadError(TIMESTAMP_COLUMN)

    def _build_filter(
        self,
        schema: pa.Schema,
        contract: Optional[str],
        date_range: DateRange,
        timestamp: ds.Expression,
    ) -> Optional[ds.Expression]:
        """AND together the contract and inclusive millisecond bounds."""
        conditions = []

        contract_condition = self._source.contract_filter(contract)
        if contract_condition is not None:
            if CONTRACT_COLUMN not in schema.names:
                raise ColumnReadError(CONTRACT_COLUMN)
            conditions.append(contract_condition)

        if date_range.start_ms is not None:
            conditions.append(timestamp >= date_range.start_ms)
        if date_range.end_ms is not None:
            conditions.append(timestamp <= date_range.end_ms)

        predicate = None
        for condition in conditions:
            predicate = condition if predicate is None else predicate & condition
        return predicate

    def _scan(
        self,
        dataset: ds.Dataset,
        predicate: Optional[ds.Expression],
        timestamp: ds.Expression,
        value_columns: Sequence[str],
    ) -> list[dict]:
        """Filter, project and sort ascending by timestamp, then materialize rows."""
        projection = {TIMESTAMP_COLUMN: timestamp}
        for column in value_columns:
            projection[column] = ds.field(column).cast(pa.float64())

        try:
            table = dataset.to_table(columns=projection, filter=predicate)
        except OSError as e:
            logger.warning(f"Failed to read bars from {self._source.location}: {e}")
            raise SourceUnavailableError(self._source.location) from None
        except (pa.ArrowInvalid, pa.ArrowTypeError, pa.ArrowNotImplementedError) as e:
            logger.warning(f"Failed to project bar columns: {e}")
            raise ColumnReadError(", ".join(projection)) from None

        return table.sort_by(TIMESTAMP_COLUMN).to_pylist()


# Singleton instance
_service_instance: Optional[BarsService] = None


def get_bars_service() -> BarsService:
    """Get or create bars service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = BarsService(
            source=build_source(settings),
            indicator_columns=settings.indicator_columns,
        )
    return _service_instance
