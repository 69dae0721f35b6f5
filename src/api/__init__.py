# src/api/__init__.py
from .endpoints import create_app, parse_delay, parse_limit, MAX_DELAY_MS
