"""Indicator series tests"""

import math

import pyarrow as pa
import pytest

from app.schemas.bars import BarsQuery, IndicatorPane, SeriesKind
from app.services.bars import BarsService, ParquetBarsSource
from app.services.bars.indicators import classify_pane, indicator_label
from app.services.bars.service import parse_point
from app.services.base import InvalidDateError

from conftest import (
    NAN,
    OCT24_1210,
    OCT24_1215,
    OCT24_1220,
    OCT24_LAST_SECOND,
    OCT24_MIDNIGHT,
    build_table,
    write_parquet,
)


class TestPaneClassification:
    @pytest.mark.parametrize(
        "indicator_id, pane",
        [
            ("rsi_14_ema", IndicatorPane.RSI),
            ("rsi_14_wilder", IndicatorPane.RSI),
            ("atr_14", IndicatorPane.ATR),
            ("vwap", IndicatorPane.PRICE),
            ("ema_21", IndicatorPane.PRICE),
            ("macd_rsi", IndicatorPane.PRICE),
        ],
    )
    def test_prefix(self, indicator_id, pane):
        assert classify_pane(indicator_id) == pane

    def test_label(self):
        assert indicator_label("rsi_14_wilder") == "RSI 14 WILDER"
        assert indicator_label("vwap") == "VWAP"


class TestParsePoint:
    def test_parsed(self):
        point = parse_point({"timestamp": 1729771800500, "vwap": 71.2}, "vwap")
        assert (point.time, point.value) == (1729771800, 71.2)

    def test_dropped(self):
        assert parse_point({"timestamp": 1729771800000, "vwap": NAN}, "vwap") is None
        assert parse_point({"timestamp": 1729771800000, "vwap": None}, "vwap") is None
        assert parse_point({"timestamp": 1729771800000}, "vwap") is None
        assert parse_point({"timestamp": 1729771800000, "vwap": float("inf")}, "vwap") is None
        assert parse_point({"timestamp": 1729771800000, "vwap": float("-inf")}, "vwap") is None


class TestLoadSeries:
    def test_catalog_order_and_absent_columns(self, bars_service, indicator_catalog):
        series = bars_service.load_series("CLZ4_ohlcv1m")

        assert [s.id for s in series] == ["vwap", "ema_9", "rsi_14_wilder", "atr_14"]
        assert len(series) < len(indicator_catalog)

    def test_series_metadata(self, bars_service):
        by_id = {s.id: s for s in bars_service.load_series("CLZ4_ohlcv1m")}

        assert by_id["vwap"].name == "VWAP"
        assert by_id["vwap"].pane == IndicatorPane.PRICE
        assert by_id["rsi_14_wilder"].pane == IndicatorPane.RSI
        assert by_id["atr_14"].pane == IndicatorPane.ATR
        assert all(s.kind == SeriesKind.LINE for s in by_id.values())

    def test_points_skip_null_and_nan(self, bars_service):
        by_id = {
            s.id: s for s in bars_service.load_series("CLZ4_ohlcv1m", "2024-10-24", "2024-10-24")
        }

        assert [p.time for p in by_id["vwap"].data] == [
            OCT24_MIDNIGHT,
            OCT24_1210,
            OCT24_1215,
            OCT24_1220,
            OCT24_LAST_SECOND,
        ]
        assert [p.time for p in by_id["ema_9"].data] == [
            OCT24_MIDNIGHT,
            OCT24_1215,
            OCT24_1220,
            OCT24_LAST_SECOND,
        ]
        assert [p.time for p in by_id["rsi_14_wilder"].data] == [
            OCT24_1210,
            OCT24_1215,
            OCT24_1220,
            OCT24_LAST_SECOND,
        ]
        assert [p.time for p in by_id["atr_14"].data] == [
            OCT24_MIDNIGHT,
            OCT24_1215,
            OCT24_1220,
            OCT24_LAST_SECOND,
        ]

    def test_points_are_sorted_and_finite(self, bars_service):
        for series in bars_service.load_series():
            times = [p.time for p in series.data]
            assert times == sorted(times)
            assert not any(math.isnan(p.value) for p in series.data)

    def test_unfiltered_series_have_unique_times(self, bars_service):
        # CLZ4 and ESZ4 both have a 12:10 bar; the earlier row wins
        for series in bars_service.load_series():
            times = [p.time for p in series.data]
            assert len(times) == len(set(times))

        vwap = bars_service.load_series()[0]
        assert [p.value for p in vwap.data if p.time == OCT24_1210] == [71.2]

    def test_infinite_values_are_skipped(self, tmp_path, indicator_catalog):
        table = pa.table(
            {
                "timestamp": pa.array([OCT24_1210 * 1000, OCT24_1215 * 1000], type=pa.int64()),
                "vwapd": pa.array([float("inf"), 2.0], type=pa.float64()),
                "atr_14": pa.array([0.3, float("-inf")], type=pa.float64()),
            }
        )
        path = write_parquet(tmp_path / "inf.parquet", table)
        service = BarsService(ParquetBarsSource(str(path)), indicator_catalog)

        by_id = {s.id: s for s in service.load_series()}

        assert [(p.time, p.value) for p in by_id["vwapd"].data] == [(OCT24_1215, 2.0)]
        assert [(p.time, p.value) for p in by_id["atr_14"].data] == [(OCT24_1210, 0.3)]

    def test_indicator_rows_kept_when_prices_missing(self, bars_service):
        # 12:15 has no close and 12:20 has a NaN open; indicators still plot
        vwap = bars_service.load_series("CLZ4_ohlcv1m", "2024-10-24", "2024-10-24")[0]
        assert {OCT24_1215, OCT24_1220} <= {p.time for p in vwap.data}

    def test_no_indicator_columns(self, tmp_path, indicator_catalog):
        table = build_table(drop=("vwap", "ema_9", "rsi_14_wilder", "atr_14"))
        path = write_parquet(tmp_path / "plain.parquet", table)
        service = BarsService(ParquetBarsSource(str(path)), indicator_catalog)

        assert service.load_series() == []

    def test_catalog_controls_order(self, bars_path):
        service = BarsService(ParquetBarsSource(str(bars_path)), ["atr_14", "missing", "vwap"])

        assert [s.id for s in service.load_series()] == ["atr_14", "vwap"]

    def test_invalid_date(self, bars_service):
        with pytest.raises(InvalidDateError):
            bars_service.load_series(end="2024-10-24 23:59")

    def test_idempotent(self, bars_service):
        assert bars_service.load_series("CLZ4_ohlcv1m") == bars_service.load_series("CLZ4_ohlcv1m")

    @pytest.mark.asyncio
    async def test_series_wrapper(self, bars_service):
        response = await bars_service.series(BarsQuery(contract="ESZ4_ohlcv1m"))

        assert [len(s.data) for s in response.series] == [1, 1, 1, 1]
