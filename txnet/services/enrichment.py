"""
Enrichment of graph results with relational attributes.

Graph records only carry business ids. This service joins them in memory
with names and industries from the relational store. A missing relational
record never fails the call: the attribute is left empty (nodes) or falls
back to the raw id (transactions).
"""

import asyncio
import logging
from typing import Optional

from ..graph.graph_client import EdgeFilter, TransactionGraphClient
from ..storage.business_store import BusinessStore

logger = logging.getLogger(__name__)


class EnrichmentService:
    """Joins graph topology with business attributes at read time."""

    def __init__(self, graph: TransactionGraphClient, businesses: BusinessStore):
        self.graph = graph
        self.businesses = businesses

    async def get_enriched_graph(self) -> dict:
        """
        Get every node and aggregate edge, with nodes labelled by name.

        Topology and attributes are fetched concurrently; there is no
        ordering dependency between them.

        Returns:
            Dict with "nodes" and "edges" lists
        """
        nodes, edges, details = await asyncio.gather(
            self.graph.get_all_nodes(),
            self.graph.aggregate_edges(),
            self.businesses.get_all_details(),
        )

        enriched_nodes = [
            {
                **node,
                "label": details.name_map.get(node["id"]),
                "industry": details.industry_map.get(node["id"]),
            }
            for node in nodes
        ]

        missing = sum(1 for node in enriched_nodes if node["label"] is None)
        if missing:
            logger.warning(f"{missing} graph node(s) have no relational business")

        return {"nodes": enriched_nodes, "edges": edges}

    async def get_enriched_transactions(
        self, from_id: Optional[str] = None, to_id: Optional[str] = None
    ) -> list[dict]:
        """
        List transactions with business names in place of ids.

        Edges and business details are fetched concurrently.

        Args:
            from_id: Optional paying business filter
            to_id: Optional receiving business filter

        Returns:
            Transactions, most recent first
        """
        transactions, details = await asyncio.gather(
            self.graph.list_edges(EdgeFilter(from_id=from_id, to_id=to_id)),
            self.businesses.get_all_details(),
        )
        return [
            {
                "from": details.name_map.get(t["from"], t["from"]),
                "to": details.name_map.get(t["to"], t["to"]),
                "amount": t["amount"],
                "timestamp": t["timestamp"],
            }
            for t in transactions
        ]

    async def enrich_transaction(self, transaction: dict) -> dict:
        """Substitute names into a single transaction, falling back to ids.

        The raw ids are kept as fromId and toId, since names need not be unique.
        """
        details = await self.businesses.batch_get_details(
            [transaction["from"], transaction["to"]]
        )
        return {
            **transaction,
            "from": details.name_map.get(transaction["from"], transaction["from"]),
            "to": details.name_map.get(transaction["to"], transaction["to"]),
            "fromId": transaction["from"],
            "toId": transaction["to"],
        }
