# src/__init__.py
from .dataset_store import DatasetStore
from .query_engine import LookupStatus, QueryEngine, QueryResult
