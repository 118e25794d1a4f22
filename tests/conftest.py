"""Shared fixtures: in-memory DuckDB, in-memory graph, and a wired app."""

import pytest
from fastapi.testclient import TestClient

from fakes import InMemoryGraphClient
from txnet.api.main import create_app
from txnet.api.state import AppState
from txnet.storage import BusinessStore, DuckDBClient


@pytest.fixture
def duckdb_client():
    client = DuckDBClient(":memory:")
    client.initialize()
    yield client
    client.close()


@pytest.fixture
def business_store(duckdb_client):
    return BusinessStore(duckdb_client)


@pytest.fixture
def graph():
    return InMemoryGraphClient()


@pytest.fixture
def app_state(graph, business_store, duckdb_client):
    return AppState(graph=graph, businesses=business_store, db=duckdb_client)


@pytest.fixture
def api_client(app_state):
    """TestClient over an app that ran the startup sync (12 demo businesses)."""
    app = create_app(state=app_state, run_sync=True)
    with TestClient(app) as client:
        yield client
