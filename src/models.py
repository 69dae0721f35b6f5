# src/models.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from .exceptions import DataValidationError

# A series maps timestamp keys ("YYYY-MM-DD" or "YYYY-MM-DD HH:MM:SS") to bars
TimeSeries = Mapping[str, "PriceBar"]

@dataclass(frozen=True)
class PriceBar:
    open: float
    high: float
    low: float
    close: float
    volume: int

    def __post_init__(self):
        for name in ('open', 'high', 'low', 'close'):
            if getattr(self, name) <= 0:
                raise DataValidationError(f"{name} must be positive")
        if isinstance(self.volume, bool) or not isinstance(self.volume, int):
            raise DataValidationError("Volume must be an integer")
        if self.volume < 0:
            raise DataValidationError("Volume cannot be negative")
        if not (self.low <= self.open <= self.high and
                self.low <= self.close <= self.high):
            raise DataValidationError("Price values are inconsistent")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PriceBar':
        """Create PriceBar instance from a fixture dictionary"""
        try:
            return cls(
                open=float(data['open']),
                high=float(data['high']),
                low=float(data['low']),
                close=float(data['close']),
                volume=int(data['volume']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DataValidationError(f"Invalid price bar {data!r}: {e}") from e

@dataclass(frozen=True)
class SymbolRecord:
    symbol: str
    name: str
    sector: str
    exchange: str
    daily: TimeSeries = field(default_factory=lambda: MappingProxyType({}))
    intraday: Mapping[str, TimeSeries] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if not self.symbol:
            raise DataValidationError("Symbol cannot be empty")
        if self.symbol != self.symbol.upper():
            raise DataValidationError(f"Symbol must be uppercase: {self.symbol}")

    @property
    def intervals(self) -> List[str]:
        """Interval labels in fixture order"""
        return list(self.intraday.keys())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SymbolRecord':
        """Create SymbolRecord from a fixture entry, freezing every series"""
        try:
            daily = _series_from_dict(data.get('daily', {}))
            intraday = MappingProxyType({
                interval: _series_from_dict(series)
                for interval, series in data.get('intraday', {}).items()
            })
            return cls(
                symbol=data['symbol'],
                name=data['name'],
                sector=data['sector'],
                exchange=data['exchange'],
                daily=daily,
                intraday=intraday,
            )
        except (KeyError, AttributeError) as e:
            raise DataValidationError(f"Invalid symbol record: {e}") from e

@dataclass(frozen=True)
class StockSummary:
    symbol: str
    name: str
    sector: str
    exchange: str
    available_intervals: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape used by the stocks listing"""
        return {
            'symbol': self.symbol,
            'name': self.name,
            'sector': self.sector,
            'exchange': self.exchange,
            'availableIntervals': list(self.available_intervals),
        }

def _series_from_dict(raw: Dict[str, Any]) -> TimeSeries:
    return MappingProxyType({
        key: PriceBar.from_dict(bar) for key, bar in raw.items()
    })
