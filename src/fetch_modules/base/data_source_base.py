# src/fetch_modules/base/data_source_base.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

class MarketDataSource(ABC):
    """Abstract base class for market data sources"""

    @abstractmethod
    async def get_daily_stock_data(
        self,
        symbol: str,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """Fetch the daily time series for a symbol

        Args:
            symbol: Stock symbol
            limit: Optional number of most recent bars

        Returns:
            Decoded provider-style payload
        """
        pass

    @abstractmethod
    async def get_intraday_data(
        self,
        symbol: str,
        interval: str = "5min",
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """Fetch the intraday time series for a symbol and interval"""
        pass

    @abstractmethod
    async def list_tracked_stocks(self) -> Dict[str, Any]:
        """List the symbols the source tracks"""
        pass
