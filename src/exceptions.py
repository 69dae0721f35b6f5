# src/exceptions.py
from typing import Any, Optional


class DataError(Exception):
    """Base class for data-related errors"""
    pass

class DataValidationError(DataError):
    """Raised when data validation fails"""
    pass

class DatasetLoadError(DataValidationError):
    """Raised when the fixture dataset cannot be loaded"""
    pass

class ConfigError(DataError):
    """Raised when environment configuration is invalid or missing"""
    pass

class DataFetchError(DataError):
    """Raised when data fetching fails"""
    pass

class MarketApiError(DataFetchError):
    """Raised when a call to the market data API fails.

    ``status`` keeps the upstream HTTP status code when a response was
    received; it is None for timeouts and connection failures.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        error_kind: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.error_kind = error_kind
        self.body = body
