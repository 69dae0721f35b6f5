# tests/conftest.py
import copy
import pytest
from fastapi.testclient import TestClient

from src.api.endpoints import create_app
from src.config import ServerConfig
from src.dataset_store import DatasetStore
from src.query_engine import QueryEngine

SAMPLE_DATASET = {
    "AAPL": {
        "symbol": "AAPL",
        "name": "Apple Inc.",
        "sector": "Technology",
        "exchange": "NASDAQ",
        "daily": {
            "2025-01-09": {"open": 187.05, "high": 189.8, "low": 186.4, "close": 189.12, "volume": 91234500},
            "2025-01-10": {"open": 189.45, "high": 191.22, "low": 188.9, "close": 190.75, "volume": 98852000},
        },
        "intraday": {
            "5min": {
                "2025-01-10 09:40:00": {"open": 189.88, "high": 190.15, "low": 189.8, "close": 190.02, "volume": 544000},
                "2025-01-10 09:30:00": {"open": 189.45, "high": 189.72, "low": 189.3, "close": 189.6, "volume": 612000},
                "2025-01-10 09:50:00": {"open": 190.1, "high": 190.42, "low": 189.98, "close": 190.35, "volume": 498000},
                "2025-01-10 09:35:00": {"open": 189.6, "high": 189.95, "low": 189.51, "close": 189.88, "volume": 577500},
                "2025-01-10 09:45:00": {"open": 190.02, "high": 190.2, "low": 189.9, "close": 190.1, "volume": 503200},
            },
            "1min": {},
        },
    },
    "MSFT": {
        "symbol": "MSFT",
        "name": "Microsoft Corporation",
        "sector": "Technology",
        "exchange": "NASDAQ",
        "daily": {},
        "intraday": {},
    },
}

@pytest.fixture
def sample_raw():
    """Deep copy of the sample fixture so tests can mutate it"""
    return copy.deepcopy(SAMPLE_DATASET)

@pytest.fixture
def sample_store(sample_raw):
    return DatasetStore.from_dict(sample_raw)

@pytest.fixture(scope="session")
def bundled_store():
    """Store loaded from the fixture shipped with the package"""
    return DatasetStore.from_file()

@pytest.fixture
def engine(sample_store):
    return QueryEngine(sample_store)

@pytest.fixture
def server_config():
    return ServerConfig(environment="test")

@pytest.fixture
def api_client(sample_store, server_config):
    """FastAPI test client over the sample dataset"""
    app = create_app(store=sample_store, config=server_config)
    with TestClient(app) as client:
        yield client
