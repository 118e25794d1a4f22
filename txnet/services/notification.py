"""
Push notifications for graph changes.

After every transaction the full enriched graph is recomputed and sent to
every connected client, together with the transaction that triggered it.
This is a full-state broadcast, not a delta.
"""

import logging
from typing import Any, Optional, Protocol

from ..utils.constants import GRAPH_UPDATE_EVENT
from .enrichment import EnrichmentService

logger = logging.getLogger(__name__)


class ConnectionHub(Protocol):
    async def broadcast(self, event: str, data: Any) -> None: ...


class NotificationService:
    def __init__(self, enrichment: EnrichmentService):
        self.enrichment = enrichment

    async def broadcast_update(
        self, hub: Optional[ConnectionHub], new_transaction: dict
    ) -> None:
        """
        Send the current graph and the new transaction to all clients.

        Args:
            hub: Connection hub, or None when nobody can be notified
            new_transaction: Transaction that triggered the update
        """
        if hub is None:
            return

        graph = await self.enrichment.get_enriched_graph()
        await hub.broadcast(
            GRAPH_UPDATE_EVENT,
            {
                "nodes": graph["nodes"],
                "edges": graph["edges"],
                "newTransaction": new_transaction,
            },
        )
        logger.debug(
            f"Broadcast graph update ({len(graph['nodes'])} nodes, "
            f"{len(graph['edges'])} edges)"
        )
