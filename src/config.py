# src/config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 4000
DEFAULT_ENVIRONMENT = 'development'
DEFAULT_TIMEOUT_MS = 2000

def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got '{raw}'") from e

@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    environment: str = DEFAULT_ENVIRONMENT
    log_level: str = 'INFO'
    dataset_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ServerConfig':
        """Build server settings from environment variables (.env honoured)"""
        load_dotenv()
        return cls(
            host=os.getenv('MARKET_API_HOST', DEFAULT_HOST).strip(),
            port=_parse_int('MARKET_API_PORT', DEFAULT_PORT),
            environment=os.getenv('APP_ENV', DEFAULT_ENVIRONMENT).strip() or DEFAULT_ENVIRONMENT,
            log_level=os.getenv('LOG_LEVEL', 'INFO').strip().upper(),
            dataset_path=os.getenv('MARKET_DATASET_PATH', '').strip() or None,
        ).validate()

    def validate(self) -> 'ServerConfig':
        """Validate required configuration"""
        if not 0 < self.port < 65536:
            raise ConfigError(f"MARKET_API_PORT out of range: {self.port}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown LOG_LEVEL: {self.log_level}")
        return self

@dataclass
class ClientConfig:
    base_url: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """Build client settings; MARKET_API_BASE_URL is required"""
        load_dotenv()
        return cls(
            base_url=os.getenv('MARKET_API_BASE_URL', '').strip(),
            timeout_ms=_parse_int('MARKET_API_TIMEOUT_MS', DEFAULT_TIMEOUT_MS),
        ).validate()

    def validate(self) -> 'ClientConfig':
        if not self.base_url:
            raise ConfigError(
                "Missing MARKET_API_BASE_URL: point it to the local market data API"
            )
        if self.timeout_ms <= 0:
            raise ConfigError("MARKET_API_TIMEOUT_MS must be a positive integer")
        self.base_url = self.base_url.rstrip('/')
        return self

def setup_logging(level: str = 'INFO') -> None:
    """Configure root logging for the service and CLI tools"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
