# tests/test_endpoints.py

import time
import pytest
from unittest.mock import AsyncMock, patch

from src.api import endpoints
from src.api.endpoints import MAX_DELAY_MS, parse_delay, parse_limit, respond

BASE = "/api/v1"

@pytest.mark.parametrize('value,expected', [
    (None, 0),
    ("", 0),
    ("abc", 0),
    ("-5", 0),
    ("0", 0),
    ("250", 250),
    ("10000", 10000),
    ("50000", MAX_DELAY_MS),
    ("²", 0),
    ("１０", 0),
    ("9" * 5000, MAX_DELAY_MS),
    ("000250", 250),
])
def test_parse_delay(value, expected):
    """Test delay parsing and clamping"""
    assert parse_delay(value) == expected

@pytest.mark.parametrize('value,expected', [
    (None, None),
    ("3", 3),
    ("0", None),
    ("-2", None),
    ("many", None),
    ("³", None),
    ("007", 7),
])
def test_parse_limit(value, expected):
    assert parse_limit(value) == expected

def test_health(api_client):
    """Test health payload"""
    response = api_client.get(f"{BASE}/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["timestamp"].endswith("Z")

def test_list_stocks(api_client):
    response = api_client.get(f"{BASE}/stocks")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [entry["symbol"] for entry in data] == ["AAPL", "MSFT"]
    assert data[0] == {
        "symbol": "AAPL",
        "name": "Apple Inc.",
        "sector": "Technology",
        "exchange": "NASDAQ",
        "availableIntervals": ["5min", "1min"],
    }

def test_get_stock(api_client):
    """Test single symbol lookup uppercases the path parameter"""
    response = api_client.get(f"{BASE}/stocks/aapl")

    assert response.status_code == 200
    assert response.json() == {
        "data": {"symbol": "AAPL", "availableIntervals": ["5min", "1min"]}
    }

def test_get_stock_unknown(api_client):
    response = api_client.get(f"{BASE}/stocks/nope")

    assert response.status_code == 404
    assert response.json() == {
        "error": "SymbolNotFound",
        "message": "Symbol 'NOPE' is not available in the dataset.",
    }

def test_daily(api_client):
    """Test daily series ordering and compact output"""
    response = api_client.get(f"{BASE}/stocks/aapl/daily", params={"limit": "1"})

    assert response.status_code == 200
    body = response.json()
    assert list(body["Time Series (Daily)"]) == ["2025-01-10"]
    assert body["Meta Data"]["4. Output Size"] == "compact"
    assert body["Time Series (Daily)"]["2025-01-10"] == {
        "1. open": "189.45",
        "2. high": "191.22",
        "3. low": "188.90",
        "4. close": "190.75",
        "5. volume": "98852000",
    }

def test_daily_invalid_limit_ignored(api_client):
    response = api_client.get(f"{BASE}/stocks/AAPL/daily", params={"limit": "zero"})

    assert response.status_code == 200
    assert response.json()["Meta Data"]["4. Output Size"] == "full"
    assert len(response.json()["Time Series (Daily)"]) == 2

def test_daily_unknown_symbol(api_client):
    response = api_client.get(f"{BASE}/stocks/INVALID/daily")

    assert response.status_code == 404
    assert response.json()["error"] == "SymbolNotFound"

def test_intraday(api_client):
    response = api_client.get(
        f"{BASE}/stocks/AAPL/intraday", params={"interval": "5min", "limit": "2"}
    )

    assert response.status_code == 200
    assert list(response.json()["Time Series (5min)"]) == [
        "2025-01-10 09:50:00", "2025-01-10 09:45:00",
    ]

def test_intraday_missing_interval_skips_engine(api_client):
    """Test a missing interval is rejected before any query runs"""
    with patch("src.api.endpoints.QueryEngine.resolve_intraday") as resolve:
        response = api_client.get(f"{BASE}/stocks/AAPL/intraday")

    assert response.status_code == 400
    assert response.json() == {
        "error": "MissingInterval",
        "message": "Query parameter 'interval' is required (e.g. 5min).",
    }
    resolve.assert_not_called()

def test_intraday_unknown_symbol(api_client):
    response = api_client.get(f"{BASE}/stocks/XYZ/intraday", params={"interval": "5min"})

    assert response.status_code == 404
    assert response.json()["error"] == "SymbolNotFound"

def test_intraday_unknown_interval(api_client):
    response = api_client.get(f"{BASE}/stocks/aapl/intraday", params={"interval": "99min"})

    assert response.status_code == 404
    assert response.json() == {
        "error": "IntervalNotFound",
        "message": "Interval '99min' is not available for symbol 'AAPL'.",
    }

def test_delay_is_clamped(api_client):
    """Test oversized delays are capped at the maximum"""
    fake_respond = AsyncMock(side_effect=lambda payload, delay_ms: payload)
    with patch.object(endpoints, "respond", fake_respond):
        response = api_client.get(f"{BASE}/stocks/AAPL/daily", params={"delay": "50000"})

    assert response.status_code == 200
    payload, delay_ms = fake_respond.await_args.args
    assert delay_ms == MAX_DELAY_MS
    assert payload == response.json()

def test_delay_applies_to_every_route(api_client):
    fake_respond = AsyncMock(side_effect=lambda payload, delay_ms: payload)
    with patch.object(endpoints, "respond", fake_respond):
        api_client.get(f"{BASE}/health", params={"delay": "5"})
        api_client.get(f"{BASE}/stocks", params={"delay": "-1"})
        api_client.get(f"{BASE}/stocks/AAPL", params={"delay": "x"})
        api_client.get(
            f"{BASE}/stocks/AAPL/intraday", params={"interval": "5min", "delay": "7"}
        )

    assert [call.args[1] for call in fake_respond.await_args_list] == [5, 0, 0, 7]

def test_small_delay_is_honoured(api_client):
    start = time.perf_counter()
    response = api_client.get(f"{BASE}/health", params={"delay": "100"})

    assert response.status_code == 200
    assert time.perf_counter() - start >= 0.09

@pytest.mark.asyncio
async def test_respond_returns_payload_unchanged():
    """Test the delay never alters the computed payload"""
    payload = {"a": 1}

    result = await respond(payload, 10)

    assert result is payload

@pytest.mark.parametrize('delay', ["²", "9" * 5000])
def test_unusual_delay_values_never_fail(api_client, delay):
    """Test non-ASCII digits and huge delays fall back instead of erroring"""
    fake_respond = AsyncMock(side_effect=lambda payload, delay_ms: payload)
    with patch.object(endpoints, "respond", fake_respond):
        response = api_client.get(f"{BASE}/health", params={"delay": delay})

    assert response.status_code == 200
    assert fake_respond.await_args.args[1] in (0, MAX_DELAY_MS)

def test_huge_limit_is_compact(api_client):
    """Test a limit too long for int() still counts as a positive limit"""
    response = api_client.get(f"{BASE}/stocks/AAPL/daily", params={"limit": "9" * 5000})

    assert response.status_code == 200
    body = response.json()
    assert body["Meta Data"]["4. Output Size"] == "compact"
    assert len(body["Time Series (Daily)"]) == 2

def test_superscript_limit_is_ignored(api_client):
    response = api_client.get(f"{BASE}/stocks/AAPL/daily", params={"limit": "²"})

    assert response.status_code == 200
    assert response.json()["Meta Data"]["4. Output Size"] == "full"
