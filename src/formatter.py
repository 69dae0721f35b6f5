# src/formatter.py
"""
Response shaping for the time series endpoints.

Payloads mirror the field labels of the public provider this service stands
in for, so existing client parsers keep working against the mock.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .models import PriceBar

TIME_ZONE = "US/Eastern"
DAILY_SERIES_KEY = "Time Series (Daily)"
DAILY_INFORMATION = "Daily Prices (open, high, low, close) and Volumes"

OUTPUT_SIZE_COMPACT = "compact"
OUTPUT_SIZE_FULL = "full"

PRICE_FIELDS = (
    ("1. open", "open"),
    ("2. high", "high"),
    ("3. low", "low"),
    ("4. close", "close"),
)
VOLUME_FIELD = "5. volume"

SeriesEntries = Sequence[Tuple[str, PriceBar]]

_CENTS = Decimal("0.01")

def intraday_series_key(interval: str) -> str:
    return f"Time Series ({interval})"

def format_price(value: float) -> str:
    """Two-decimal string; exact binary ties round half up"""
    # Decimal(value) is the exact binary value, so 1.005 (stored just below) stays 1.00
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))

def format_price_bar(bar: PriceBar) -> Dict[str, str]:
    """
    Render one bar as the provider's numbered string fields.

    Args:
        bar (PriceBar): The bar to render.

    Returns:
        Dict[str, str]: Prices with two decimals and volume as a plain integer.
    """
    formatted = {label: format_price(getattr(bar, attr)) for label, attr in PRICE_FIELDS}
    formatted[VOLUME_FIELD] = str(bar.volume)
    return formatted

def format_series(entries: SeriesEntries) -> Dict[str, Dict[str, str]]:
    """Formatted series keyed by timestamp; insertion order follows entries"""
    return {key: format_price_bar(bar) for key, bar in entries}

def _output_size(limited: bool) -> str:
    return OUTPUT_SIZE_COMPACT if limited else OUTPUT_SIZE_FULL

def _meta_block(fields: List[Tuple[str, Optional[str]]]) -> Dict[str, str]:
    # Absent values (empty series) are left out instead of sent as null
    return {label: value for label, value in fields if value is not None}

def build_daily_payload(
    symbol: str,
    entries: SeriesEntries,
    limited: bool,
    last_refreshed: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the daily time series payload from already-ordered entries"""
    if last_refreshed is None and entries:
        last_refreshed = entries[0][0]

    meta = _meta_block([
        ("1. Information", DAILY_INFORMATION),
        ("2. Symbol", symbol),
        ("3. Last Refreshed", last_refreshed),
        ("4. Output Size", _output_size(limited)),
        ("5. Time Zone", TIME_ZONE),
    ])
    return {
        "Meta Data": meta,
        DAILY_SERIES_KEY: format_series(entries),
    }

def build_intraday_payload(
    symbol: str,
    interval: str,
    entries: SeriesEntries,
    limited: bool,
    last_refreshed: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the intraday time series payload for one interval"""
    if last_refreshed is None and entries:
        last_refreshed = entries[0][0]

    meta = _meta_block([
        ("1. Information", f"Intraday ({interval}) prices and volumes"),
        ("2. Symbol", symbol),
        ("3. Last Refreshed", last_refreshed),
        ("4. Interval", interval),
        ("5. Output Size", _output_size(limited)),
        ("6. Time Zone", TIME_ZONE),
    ])
    return {
        "Meta Data": meta,
        intraday_series_key(interval): format_series(entries),
    }
