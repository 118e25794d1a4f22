"""Application state: the clients and services one app instance works with."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from fastapi.requests import HTTPConnection

from ..graph.graph_client import TransactionGraphClient
from ..services import (
    BusinessService,
    EnrichmentService,
    NotificationService,
    SynchronizationRoutine,
    TransactionService,
)
from ..storage.business_store import BusinessStore
from ..storage.duckdb_client import DuckDBClient
from .config import LocalConfig
from .connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """State container built once and passed to the app factory.

    Services are derived from the two store clients, so tests can supply
    their own clients and get a fully wired state.
    """

    graph: TransactionGraphClient
    businesses: BusinessStore
    db: Optional[DuckDBClient] = None
    connections: ConnectionManager = field(default_factory=ConnectionManager)

    def __post_init__(self):
        self.enrichment = EnrichmentService(self.graph, self.businesses)
        self.business_service = BusinessService(self.graph, self.businesses)
        self.transaction_service = TransactionService(self.graph)
        self.notifications = NotificationService(self.enrichment)

    @classmethod
    def from_config(cls, config: LocalConfig) -> "AppState":
        """Open both stores as configured."""
        db = DuckDBClient(config.DATABASE_PATH)
        db.initialize()

        graph = TransactionGraphClient(
            uri=config.GRAPH_URL,
            username=config.GRAPH_USERNAME,
            password=config.GRAPH_PASSWORD,
            database=config.GRAPH_DATABASE,
        )
        return cls(graph=graph, businesses=BusinessStore(db), db=db)

    def sync_routine(self) -> SynchronizationRoutine:
        return SynchronizationRoutine(self.graph, self.businesses)

    async def close(self) -> None:
        await self.graph.close()
        if self.db:
            self.db.close()


def get_app_state(connection: HTTPConnection) -> AppState:
    """Dependency returning the state of the app serving this request."""
    return connection.app.state.txnet
