"""
Storage module for the relational business store.

Provides the DuckDB client, the business table access layer and the demo
seed dataset.
"""

from .business_store import BusinessDetails, BusinessStore
from .duckdb_client import DuckDBClient
from .seed import DEMO_BUSINESSES, SeedBusiness

__all__ = [
    "BusinessDetails",
    "BusinessStore",
    "DuckDBClient",
    "DEMO_BUSINESSES",
    "SeedBusiness",
]
