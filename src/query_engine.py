# src/query_engine.py
import logging
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .dataset_store import DatasetStore
from .formatter import build_daily_payload, build_intraday_payload
from .models import PriceBar, TimeSeries

class LookupStatus(Enum):
    FOUND = "found"
    SYMBOL_NOT_FOUND = "SymbolNotFound"
    INTERVAL_NOT_FOUND = "IntervalNotFound"

@dataclass(frozen=True)
class QueryResult:
    """Outcome of a series query: a payload, or which lookup failed"""
    status: LookupStatus
    payload: Optional[Dict[str, Any]] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def error_kind(self) -> Optional[str]:
        return None if self.found else self.status.value

    @classmethod
    def ok(cls, payload: Dict[str, Any]) -> 'QueryResult':
        return cls(LookupStatus.FOUND, payload)

SYMBOL_NOT_FOUND = QueryResult(LookupStatus.SYMBOL_NOT_FOUND)
INTERVAL_NOT_FOUND = QueryResult(LookupStatus.INTERVAL_NOT_FOUND)

_SIGNED_INT = re.compile(r"([+-]?)(\d+)", re.ASCII)

def normalize_limit(value: Any) -> Optional[int]:
    """
    Reduce a raw limit to a positive int, or None meaning "no limit".

    Zero, negative, boolean and non-numeric values all collapse to None;
    they never mean "zero rows" and never raise.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        match = _SIGNED_INT.fullmatch(value.strip())
        if not match:
            return None
        sign, digits = match.groups()
        digits = digits.lstrip('0')
        if sign == '-' or not digits:
            return None
        # Longer than any series; skip int() so huge strings stay positive limits
        return sys.maxsize if len(digits) > 18 else int(digits)
    try:
        limit = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(value, float) and value != limit:
        return None
    return limit if limit > 0 else None

def sort_series_desc(series: TimeSeries) -> List[Tuple[str, PriceBar]]:
    """Series entries, most recent first.

    Keys are fixed-width, zero-padded timestamps, so lexical order is
    chronological order. sorted() is stable for equal keys.
    """
    return sorted(series.items(), key=lambda item: item[0], reverse=True)

class QueryEngine:
    """Resolves symbol/interval queries against the dataset store"""

    def __init__(self, store: DatasetStore):
        self.store = store
        self.logger = logging.getLogger(__name__)

    def _select(self, series: TimeSeries, limit: Any) -> Tuple[List[Tuple[str, PriceBar]], Optional[str], bool]:
        ordered = sort_series_desc(series)
        last_refreshed = ordered[0][0] if ordered else None
        max_rows = normalize_limit(limit)
        if max_rows is None:
            return ordered, last_refreshed, False
        return ordered[:max_rows], last_refreshed, True

    def resolve_daily(self, symbol: str, limit: Any = None) -> QueryResult:
        """
        Build the daily series payload for a symbol.

        Args:
            symbol (str): Ticker, any case.
            limit: Optional head limit; non-positive or non-numeric means no limit.

        Returns:
            QueryResult: FOUND with payload, or SYMBOL_NOT_FOUND.
        """
        record = self.store.get(symbol)
        if record is None:
            self.logger.debug(f"Daily query for unknown symbol: {symbol}")
            return SYMBOL_NOT_FOUND

        entries, last_refreshed, limited = self._select(record.daily, limit)
        return QueryResult.ok(
            build_daily_payload(record.symbol, entries, limited, last_refreshed)
        )

    def resolve_intraday(self, symbol: str, interval: str, limit: Any = None) -> QueryResult:
        """
        Build the intraday series payload for a symbol and interval label.

        The interval must match a stored label exactly (case-sensitive).

        Returns:
            QueryResult: FOUND with payload, SYMBOL_NOT_FOUND or INTERVAL_NOT_FOUND.
        """
        record = self.store.get(symbol)
        if record is None:
            self.logger.debug(f"Intraday query for unknown symbol: {symbol}")
            return SYMBOL_NOT_FOUND

        series = record.intraday.get(interval)
        if series is None:
            self.logger.debug(f"Interval {interval} not available for {record.symbol}")
            return INTERVAL_NOT_FOUND

        entries, last_refreshed, limited = self._select(series, limit)
        return QueryResult.ok(
            build_intraday_payload(record.symbol, interval, entries, limited, last_refreshed)
        )
