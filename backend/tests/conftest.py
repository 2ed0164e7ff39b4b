"""Pytest configuration and fixtures for the bars backend."""

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import app
from app.services.bars import BarsService, ParquetBarsSource, get_bars_service

NAN = float("nan")

# Epoch seconds around 2024-10-24 (UTC)
OCT23_LAST_SECOND = 1729727999
OCT24_MIDNIGHT = 1729728000
OCT24_1210 = 1729771800
OCT24_1215 = 1729772100
OCT24_1220 = 1729772400
OCT24_LAST_SECOND = 1729814399
OCT25_MIDNIGHT = 1729814400

# contract, seconds, open, high, low, close, vwap, ema_9, rsi_14_wilder, atr_14
# Deliberately out of time order.
SAMPLE_ROWS = [
    ("CLZ4_ohlcv1m", OCT24_1210, 71.22, 71.32, 71.21, 71.25, 71.2, NAN, 55.0, None),
    ("CLZ4_ohlcv1m", OCT23_LAST_SECOND, 70.0, 70.5, 69.9, 70.2, 70.1, 70.0, 50.0, 0.3),
    ("CLZ4_ohlcv1m", OCT25_MIDNIGHT, 71.05, 71.2, 71.0, 71.1, 71.05, 71.02, 61.0, 0.28),
    ("CLZ4_ohlcv1m", OCT24_MIDNIGHT, 70.2, 70.4, 70.1, 70.3, 70.25, 70.1, NAN, 0.31),
    ("CLZ4_ohlcv1m", OCT24_1215, 71.25, 71.28, 71.12, None, 71.21, 71.21, 56.0, 0.3),
    ("CLZ4_ohlcv1m", OCT24_LAST_SECOND, 71.0, 71.1, 70.9, 71.05, 71.0, 71.0, 60.0, 0.29),
    ("CLZ4_ohlcv1m", OCT24_1220, NAN, 71.4, 71.2, 71.36, 71.3, 71.3, 57.0, 0.3),
    ("ESZ4_ohlcv1m", OCT24_1210, 5800.0, 5801.0, 5799.0, 5800.5, 5800.0, 5800.0, 50.0, 2.0),
]

COLUMNS = ["contract", "timestamp", "open", "high", "low", "close", "vwap", "ema_9", "rsi_14_wilder", "atr_14"]


def build_table(rows=SAMPLE_ROWS, drop: tuple[str, ...] = ()) -> pa.Table:
    """Build a bars table with millisecond timestamps."""
    data = {name: [row[i] for row in rows] for i, name in enumerate(COLUMNS)}
    data["timestamp"] = [seconds * 1000 for seconds in data["timestamp"]]
    arrays = {}
    for name, values in data.items():
        if name in drop:
            continue
        if name == "contract":
            arrays[name] = pa.array(values, type=pa.string())
        elif name == "timestamp":
            arrays[name] = pa.array(values, type=pa.int64())
        else:
            arrays[name] = pa.array(values, type=pa.float64())
    return pa.table(arrays)


def write_parquet(path: Path, table: pa.Table) -> Path:
    pq.write_table(table, path)
    return path


@pytest.fixture
def indicator_catalog() -> list[str]:
    return list(get_settings().indicator_columns)


@pytest.fixture
def bars_path(tmp_path: Path) -> Path:
    """Parquet file with two contracts, gaps and null/NaN values."""
    return write_parquet(tmp_path / "bars.parquet", build_table())


@pytest.fixture
def bars_service(bars_path: Path, indicator_catalog: list[str]) -> BarsService:
    return BarsService(ParquetBarsSource(str(bars_path)), indicator_catalog)


@pytest.fixture
def client(bars_service: BarsService):
    """TestClient wired to the sample parquet service."""
    app.dependency_overrides[get_bars_service] = lambda: bars_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
