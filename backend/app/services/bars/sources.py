"""
Bars Data Sources

Columnar datasets the bars service scans. Both strategies hand back a
pyarrow Dataset so filtering, projection and sorting are shared.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

import pyarrow as pa
import pyarrow.dataset as ds

from app.core.config import Settings
from app.services.base import SourceUnavailableError, UnknownContractError
from app.services.bars.demo_data import DEMO_CONTRACTS, generate_demo_table

logger = logging.getLogger(__name__)


class BarsSource(ABC):
    """Read-only tabular source of candle rows."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Where the data lives, as shown in error messages."""
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check whether the data can be located."""
        pass

    @abstractmethod
    def open(self) -> ds.Dataset:
        """
        Open the dataset for scanning.

        Raises:
            SourceUnavailableError: If the data cannot be located or opened
        """
        pass

    def contract_filter(self, contract: Optional[str]) -> Optional[ds.Expression]:
        """Row predicate selecting one contract, or None for all rows."""
        if contract is None:
            return None
        return ds.field("contract") == contract


class ParquetBarsSource(BarsSource):
    """
    Parquet file (or directory of parquet files) on local disk.

    No contract allow-list: an unknown contract simply matches no rows.
    The dataset is reopened per request, so a replaced file is picked up
    without a restart.
    """

    def __init__(self, path: str):
        self._path = path

    @property
    def location(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def open(self) -> ds.Dataset:
        if not self.exists():
            raise SourceUnavailableError(self._path)
        try:
            return ds.dataset(self._path, format="parquet")
        except (pa.ArrowException, OSError) as e:
            logger.warning(f"Failed to open parquet dataset at {self._path}: {e}")
            raise SourceUnavailableError(self._path) from None


class DemoBarsSource(BarsSource):
    """
    Fixed in-memory dataset keyed by a contract allow-list.

    Every allowed contract maps to the same candles, so no row filter is
    applied; anything outside the list is rejected.
    """

    def __init__(self, contracts: tuple[str, ...] = DEMO_CONTRACTS):
        self._contracts = contracts
        self._table = generate_demo_table()

    @property
    def location(self) -> str:
        return "demo"

    def exists(self) -> bool:
        return True

    def open(self) -> ds.Dataset:
        return ds.dataset(self._table)

    def contract_filter(self, contract: Optional[str]) -> Optional[ds.Expression]:
        if contract is not None and contract not in self._contracts:
            raise UnknownContractError(contract)
        return None


def build_source(settings: Settings) -> BarsSource:
    """Create the data source selected by configuration."""
    kind = settings.data_source.lower()
    if kind == "demo":
        return DemoBarsSource()
    if kind == "parquet":
        return ParquetBarsSource(settings.bars_data_path)
    raise ValueError(f"Unsupported data_source '{settings.data_source}' (expected parquet or demo)")
