# src/api/server.py

import argparse
import logging
from typing import Optional

import uvicorn

from ..config import ServerConfig, setup_logging
from ..dataset_store import DatasetStore
from .endpoints import create_app

logger = logging.getLogger(__name__)

def start_server(
    port: Optional[int] = None,
    host: Optional[str] = None,
    config: Optional[ServerConfig] = None,
) -> None:
    """Run the API with uvicorn until interrupted"""
    config = config or ServerConfig.from_env()
    if port is not None:
        config.port = port
    if host is not None:
        config.host = host
    config.validate()

    store = DatasetStore.from_file(config.dataset_path)
    app = create_app(store=store, config=config)
    logger.info(
        f"Market data API listening on {config.host}:{config.port} "
        f"(APP_ENV={config.environment})"
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())

def main():
    """CLI entry point"""
    parser = argparse.ArgumentParser(description='Mock market data API server')
    parser.add_argument('--host', help='Interface to bind (default: MARKET_API_HOST or 0.0.0.0)')
    parser.add_argument('--port', type=int, help='Port to listen on (default: MARKET_API_PORT or 4000)')
    parser.add_argument('--log-level', help='Logging level (default: LOG_LEVEL or INFO)')
    parser.add_argument('--dataset', help='Path to a stocks JSON fixture')
    args = parser.parse_args()

    config = ServerConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.dataset:
        config.dataset_path = args.dataset

    setup_logging(config.log_level)
    start_server(port=args.port, host=args.host, config=config)

if __name__ == "__main__":
    main()
