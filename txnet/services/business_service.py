"""
Business operations spanning the relational and graph stores.

Creating a business writes the relational row first, then the graph node.
The two writes are not transactional: if the graph write fails the row
stays, and the failure is reported to the caller.
"""

import logging
import uuid

from ..graph.graph_client import TransactionGraphClient
from ..storage.business_store import BusinessStore
from ..utils.exceptions import CrossStoreWriteError

logger = logging.getLogger(__name__)


class BusinessService:
    def __init__(self, graph: TransactionGraphClient, businesses: BusinessStore):
        self.graph = graph
        self.businesses = businesses

    async def list_businesses(self) -> list[dict]:
        return await self.businesses.list_all()

    async def create_business(self, name: str, industry: str) -> dict:
        """
        Create a business in both stores.

        Args:
            name: Business name
            industry: Business industry

        Returns:
            Dict with the row id and the generated business_id

        Raises:
            CrossStoreWriteError: If the graph write failed after the
                relational insert succeeded.
        """
        business_id = str(uuid.uuid4())
        row_id = await self.businesses.create(business_id, name, industry)

        try:
            await self.graph.find_or_create_node(business_id)
        except Exception as e:
            logger.error(
                f"Business {business_id} was stored relationally but its graph "
                f"node could not be created: {e}"
            )
            raise CrossStoreWriteError(business_id, e) from e

        return {"id": row_id, "business_id": business_id}

    async def get_transaction_count(self, business_id: str) -> dict:
        count = await self.graph.count_edges_for_node(business_id)
        return {"businessId": business_id, "transactionCount": count}
