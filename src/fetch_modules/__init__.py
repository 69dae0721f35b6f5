# src/fetch_modules/__init__.py
from .base.data_source_base import MarketDataSource
from .mock.mock_api_client import MarketApiClient, series_to_frame
