# src/api/endpoints.py

import asyncio
import logging
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import ServerConfig
from ..dataset_store import DatasetStore
from ..query_engine import LookupStatus, QueryEngine, QueryResult, normalize_limit

API_PREFIX = "/api/v1"
MAX_DELAY_MS = 10_000

_DIGITS = re.compile(r"\d+", re.ASCII)

logger = logging.getLogger(__name__)

def parse_limit(value: Optional[str]) -> Optional[int]:
    """Query-string limit; anything but a positive integer is ignored"""
    return normalize_limit(value)

def parse_delay(value: Optional[str]) -> int:
    """Artificial delay in ms, clamped to [0, MAX_DELAY_MS]"""
    if value is None:
        return 0
    raw = value.strip()
    if not _DIGITS.fullmatch(raw):
        return 0
    digits = raw.lstrip('0') or '0'
    # Clamp on length so oversized strings never reach int()
    if len(digits) > len(str(MAX_DELAY_MS)):
        return MAX_DELAY_MS
    return min(int(digits), MAX_DELAY_MS)

def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})

def symbol_not_found(symbol: str) -> JSONResponse:
    return error_response(
        404, "SymbolNotFound", f"Symbol '{symbol}' is not available in the dataset."
    )

def interval_not_found(symbol: str, interval: str) -> JSONResponse:
    return error_response(
        404,
        "IntervalNotFound",
        f"Interval '{interval}' is not available for symbol '{symbol}'.",
    )

def missing_interval() -> JSONResponse:
    return error_response(
        400, "MissingInterval", "Query parameter 'interval' is required (e.g. 5min)."
    )

async def respond(payload: Dict[str, Any], delay_ms: int) -> Dict[str, Any]:
    """Return an already computed payload, optionally after a delay"""
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
    return payload

class MarketDataEndpoints:
    """Route handlers over a query engine and its dataset store"""

    def __init__(self, store: DatasetStore, config: ServerConfig):
        self.store = store
        self.config = config
        self.engine = QueryEngine(store)
        self.router = APIRouter(prefix=API_PREFIX)
        self.router.add_api_route("/health", self.health, methods=["GET"])
        self.router.add_api_route("/stocks", self.list_stocks, methods=["GET"])
        self.router.add_api_route("/stocks/{symbol}", self.get_stock, methods=["GET"])
        self.router.add_api_route("/stocks/{symbol}/daily", self.get_daily, methods=["GET"])
        self.router.add_api_route("/stocks/{symbol}/intraday", self.get_intraday, methods=["GET"])

    async def health(self, delay: Optional[str] = None):
        """Liveness probe"""
        payload = {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "environment": self.config.environment,
        }
        return await respond(payload, parse_delay(delay))

    async def list_stocks(self, delay: Optional[str] = None):
        """List every tracked symbol with its intraday intervals"""
        payload = {"data": [summary.to_dict() for summary in self.store.list_summaries()]}
        return await respond(payload, parse_delay(delay))

    async def get_stock(self, symbol: str, delay: Optional[str] = None):
        """Describe one symbol"""
        symbol = symbol.upper()
        if not self.store.exists(symbol):
            return symbol_not_found(symbol)
        payload = {
            "data": {
                "symbol": symbol,
                "availableIntervals": self.store.intervals_for(symbol),
            }
        }
        return await respond(payload, parse_delay(delay))

    async def get_daily(
        self, symbol: str, limit: Optional[str] = None, delay: Optional[str] = None
    ):
        """Daily series, most recent first"""
        symbol = symbol.upper()
        result = self.engine.resolve_daily(symbol, parse_limit(limit))
        if not result.found:
            return symbol_not_found(symbol)
        return await respond(result.payload, parse_delay(delay))

    async def get_intraday(
        self,
        symbol: str,
        interval: Optional[str] = None,
        limit: Optional[str] = None,
        delay: Optional[str] = None,
    ):
        """Intraday series for one interval, most recent first"""
        symbol = symbol.upper()
        if not interval:
            return missing_interval()

        result: QueryResult = self.engine.resolve_intraday(symbol, interval, parse_limit(limit))
        if result.status is LookupStatus.SYMBOL_NOT_FOUND:
            return symbol_not_found(symbol)
        if result.status is LookupStatus.INTERVAL_NOT_FOUND:
            return interval_not_found(symbol, interval)
        return await respond(result.payload, parse_delay(delay))

def create_app(
    store: Optional[DatasetStore] = None,
    config: Optional[ServerConfig] = None,
) -> FastAPI:
    """
    Build the mock market data API.

    Args:
        store (DatasetStore, optional): Dataset to serve; loaded from
            config.dataset_path (or the bundled fixture) when omitted.
        config (ServerConfig, optional): Server settings; read from the
            environment when omitted.

    Returns:
        FastAPI: The configured application.
    """
    config = config or ServerConfig.from_env()
    store = store or DatasetStore.from_file(config.dataset_path)

    app = FastAPI(title="Mock Market Data API")
    endpoints = MarketDataEndpoints(store, config)
    app.include_router(endpoints.router)
    app.state.store = store
    app.state.config = config

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms)"
        )
        return response

    return app
