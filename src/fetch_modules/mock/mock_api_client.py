# src/fetch_modules/mock/mock_api_client.py

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
import pandas as pd

from ...config import ClientConfig
from ...exceptions import DataValidationError, MarketApiError
from ..base.data_source_base import MarketDataSource

class MarketApiClient(MarketDataSource):
    """
    Async client for the mock market data API.

    Failures are logged and raised as MarketApiError; nothing is retried
    here, so callers decide their own retry and backoff policy.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config or ClientConfig.from_env()
        self.logger = logging.getLogger(__name__)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> 'MarketApiClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def _get(self, path: str, action: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        try:
            async with self._get_session().get(url, params=params or {}, timeout=timeout) as response:
                if response.status >= 400:
                    body = await self._read_error_body(response)
                    error_kind = body.get('error') if isinstance(body, dict) else None
                    self.logger.error(
                        f"API error {action}: HTTP {response.status} {body}"
                    )
                    raise MarketApiError(
                        f"{action} failed with HTTP {response.status}",
                        status=response.status,
                        error_kind=error_kind,
                        body=body,
                    )
                return await response.json()
        except asyncio.TimeoutError as e:
            self.logger.error(
                f"API error {action}: timed out after {self.config.timeout_ms}ms"
            )
            raise MarketApiError(f"{action} timed out") from e
        except aiohttp.ClientError as e:
            self.logger.error(f"API error {action}: {e}")
            raise MarketApiError(f"{action} failed: {e}") from e

    @staticmethod
    async def _read_error_body(response) -> Any:
        try:
            return await response.json(content_type=None)
        except (ValueError, aiohttp.ContentTypeError):
            return await response.text()

    async def get_daily_stock_data(self, symbol: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Fetch the daily series for a symbol.

        Args:
            symbol (str): Stock symbol.
            limit (int, optional): Number of most recent days to return.

        Returns:
            Dict[str, Any]: "Meta Data" and "Time Series (Daily)" blocks.
        """
        params = {'limit': str(limit)} if limit is not None else {}
        return await self._get(f"/stocks/{symbol}/daily", "fetching daily stock data", params)

    async def get_intraday_data(
        self, symbol: str, interval: str = "5min", limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """Fetch the intraday series for a symbol at the given interval"""
        params = {'interval': interval}
        if limit is not None:
            params['limit'] = str(limit)
        return await self._get(f"/stocks/{symbol}/intraday", "fetching intraday data", params)

    async def list_tracked_stocks(self) -> Dict[str, Any]:
        return await self._get("/stocks", "listing tracked stocks")

    async def get_stock(self, symbol: str) -> Dict[str, Any]:
        return await self._get(f"/stocks/{symbol}", "fetching stock details")

    async def health(self) -> Dict[str, Any]:
        return await self._get("/health", "checking health")

def series_to_frame(payload: Dict[str, Any]) -> pd.DataFrame:
    """Convert a daily or intraday payload into an OHLCV DataFrame.

    Returns:
        DataFrame with an ascending datetime index and columns
        open, high, low, close (float) and volume (int).
    """
    series_keys = [key for key in payload if key.startswith("Time Series (")]
    if len(series_keys) != 1:
        raise DataValidationError("Payload must contain exactly one time series block")

    series = payload[series_keys[0]]
    columns = ["open", "high", "low", "close", "volume"]
    if not series:
        return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name="timestamp"))

    frame = pd.DataFrame.from_dict(series, orient="index")
    frame = frame.rename(columns={
        "1. open": "open",
        "2. high": "high",
        "3. low": "low",
        "4. close": "close",
        "5. volume": "volume",
    })
    missing = [col for col in columns if col not in frame.columns]
    if missing:
        raise DataValidationError(f"Series missing required columns: {missing}")

    frame = frame[columns]
    frame.index = pd.to_datetime(frame.index)
    frame.index.name = "timestamp"
    frame = frame.sort_index()
    frame[["open", "high", "low", "close"]] = frame[["open", "high", "low", "close"]].astype(float)
    frame["volume"] = frame["volume"].astype("int64")
    return frame

async def get_daily_stock_data(symbol: str, limit: Optional[int] = None) -> Dict[str, Any]:
    """One-shot daily fetch using MARKET_API_* environment settings"""
    async with MarketApiClient() as client:
        return await client.get_daily_stock_data(symbol, limit)

async def get_intraday_data(symbol: str, interval: str = "5min", limit: Optional[int] = None) -> Dict[str, Any]:
    async with MarketApiClient() as client:
        return await client.get_intraday_data(symbol, interval, limit)

async def list_tracked_stocks() -> Dict[str, Any]:
    async with MarketApiClient() as client:
        return await client.list_tracked_stocks()
