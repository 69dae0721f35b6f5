# src/dataset_store.py
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import DataValidationError, DatasetLoadError
from .models import StockSummary, SymbolRecord

DEFAULT_DATASET_PATH = Path(__file__).resolve().parent / "fixtures" / "stocks.json"

logger = logging.getLogger(__name__)

class DatasetStore:
    """
    Read-only, in-memory view of the tracked stocks fixture.

    The store is built once at startup and never written to afterwards, so
    it can be shared freely between requests. Every lookup uppercases the
    symbol before consulting the underlying mapping.
    """

    def __init__(self, records: Mapping[str, SymbolRecord]):
        self.logger = logging.getLogger(__name__)
        for key, record in records.items():
            if key != record.symbol or key != key.upper():
                raise DatasetLoadError(
                    f"Dataset key '{key}' does not match symbol '{record.symbol}'"
                )
        self._records = MappingProxyType(dict(records))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'DatasetStore':
        """
        Build a store from decoded fixture data.

        Args:
            raw (Dict[str, Any]): Mapping of symbol to fixture entry.

        Returns:
            DatasetStore: The populated store.
        """
        if not isinstance(raw, dict):
            raise DatasetLoadError("Dataset root must be a JSON object")
        try:
            records = {key: SymbolRecord.from_dict(entry) for key, entry in raw.items()}
        except DataValidationError as e:
            raise DatasetLoadError(f"Invalid dataset: {e}") from e
        return cls(records)

    @classmethod
    def from_file(cls, path: Optional[Union[str, Path]] = None) -> 'DatasetStore':
        """Load the store from a JSON fixture (bundled stocks.json by default)"""
        dataset_path = Path(path) if path else DEFAULT_DATASET_PATH
        try:
            with open(dataset_path, encoding='utf-8') as f:
                raw = json.load(f)
        except FileNotFoundError as e:
            raise DatasetLoadError(f"Dataset file not found: {dataset_path}") from e
        except json.JSONDecodeError as e:
            raise DatasetLoadError(f"Invalid JSON in {dataset_path}: {e}") from e

        store = cls.from_dict(raw)
        logger.info(f"Loaded {len(store.symbols)} symbols from {dataset_path}")
        return store

    @property
    def symbols(self) -> List[str]:
        return list(self._records.keys())

    def get(self, symbol: str) -> Optional[SymbolRecord]:
        """Return the record for a symbol, or None when it is not tracked"""
        return self._records.get(symbol.upper())

    def exists(self, symbol: str) -> bool:
        return self.get(symbol) is not None

    def intervals_for(self, symbol: str) -> List[str]:
        """Intraday interval labels for a symbol; empty when the symbol is unknown"""
        record = self.get(symbol)
        return record.intervals if record else []

    def list_summaries(self) -> List[StockSummary]:
        """Summaries for every tracked symbol, in fixture order"""
        return [
            StockSummary(
                symbol=record.symbol,
                name=record.name,
                sector=record.sector,
                exchange=record.exchange,
                available_intervals=record.intervals,
            )
            for record in self._records.values()
        ]
