"""Transaction reads and writes against the graph store."""

import logging
from typing import Optional

from ..graph.graph_client import EdgeFilter, TransactionGraphClient
from ..utils.exceptions import UnknownBusinessError

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, graph: TransactionGraphClient):
        self.graph = graph

    async def list_transactions(
        self, from_id: Optional[str] = None, to_id: Optional[str] = None
    ) -> list[dict]:
        return await self.graph.list_edges(EdgeFilter(from_id=from_id, to_id=to_id))

    async def filter_transactions(self, edge_filter: EdgeFilter) -> list[dict]:
        return await self.graph.list_edges(edge_filter)

    async def create_transaction(
        self, from_id: str, to_id: str, amount: float, timestamp: str
    ) -> dict:
        """
        Record a transaction between two existing businesses.

        Raises:
            UnknownBusinessError: If either business has no graph node.
        """
        transaction = await self.graph.create_edge(from_id, to_id, amount, timestamp)
        if transaction is None:
            raise UnknownBusinessError(from_id, to_id)

        logger.info(f"Recorded transaction {from_id} -> {to_id} ({amount})")
        return transaction
