"""
Demo Data

Deterministic sample candles for running the chart without a dataset.
"""

import pyarrow as pa

DEMO_CONTRACT = "DEMO_CONTRACT"

# Contracts the demo dataset answers for
DEMO_CONTRACTS = (DEMO_CONTRACT, "CLZ4_ohlcv1m")

# 5-minute crude oil bars on 2024-10-24, 12:10 to 12:55 UTC
# (time in epoch seconds, open, high, low, close)
DEMO_CANDLES = [
    (1729771800, 71.22, 71.32, 71.21, 71.25),
    (1729772100, 71.25, 71.28, 71.12, 71.22),
    (1729772400, 71.22, 71.40, 71.20, 71.36),
    (1729772700, 71.36, 71.49, 71.35, 71.47),
    (1729773000, 71.47, 71.55, 71.32, 71.38),
    (1729773300, 71.38, 71.44, 71.22, 71.27),
    (1729773600, 71.27, 71.29, 71.08, 71.15),
    (1729773900, 71.15, 71.31, 71.14, 71.28),
    (1729774200, 71.28, 71.34, 71.16, 71.21),
    (1729774500, 71.21, 71.23, 71.00, 71.05),
]


def generate_demo_table() -> pa.Table:
    """Build the demo candles in the same columnar layout as the parquet data."""
    return pa.table(
        {
            "timestamp": pa.array([c[0] * 1000 for c in DEMO_CANDLES], type=pa.int64()),
            "contract": pa.array([DEMO_CONTRACT] * len(DEMO_CANDLES), type=pa.string()),
            "open": pa.array([c[1] for c in DEMO_CANDLES], type=pa.float64()),
            "high": pa.array([c[2] for c in DEMO_CANDLES], type=pa.float64()),
            "low": pa.array([c[3] for c in DEMO_CANDLES], type=pa.float64()),
            "close": pa.array([c[4] for c in DEMO_CANDLES], type=pa.float64()),
        }
    )
