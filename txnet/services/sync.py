"""
Startup synchronization of the graph store from the relational store.

The steps run strictly in order:

1. delete every edge, then every node, from the graph store;
2. truncate the businesses table and insert the seed dataset (fresh ids);
3. find-or-create one graph node per relational business.

A failing step stops the sequence. At startup the failure is logged and the
service keeps running against whatever state the stores are in.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..graph.graph_client import TransactionGraphClient
from ..storage.business_store import BusinessStore
from ..storage.seed import DEMO_BUSINESSES, SeedBusiness
from ..utils.exceptions import SynchronizationError

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    businesses_seeded: int
    nodes_synced: int


class SynchronizationRoutine:
    """Rebuilds the graph store's nodes from a freshly seeded relational store."""

    def __init__(
        self,
        graph: TransactionGraphClient,
        businesses: BusinessStore,
        seed: Iterable[SeedBusiness] = DEMO_BUSINESSES,
    ):
        self.graph = graph
        self.businesses = businesses
        self.seed = tuple(seed)

    async def run(self) -> SyncReport:
        """
        Run the three steps in order.

        Raises:
            SynchronizationError: Naming the step that failed.
        """
        logger.info("Cleaning graph store...")
        try:
            await self.graph.clear_all()
        except Exception as e:
            raise SynchronizationError("clear graph", e) from e

        logger.info("Reseeding relational store...")
        try:
            seeded = await self.businesses.reset(self.seed)
        except Exception as e:
            raise SynchronizationError("reseed businesses", e) from e

        try:
            businesses = await self.businesses.list_all()
        except Exception as e:
            raise SynchronizationError("read businesses", e) from e

        logger.info(f"Found {len(businesses)} businesses. Syncing to graph store...")
        synced = 0
        for business in businesses:
            try:
                await self.graph.find_or_create_node(business["business_id"])
            except Exception as e:
                raise SynchronizationError(
                    f"create node {business['business_id']}", e
                ) from e
            synced += 1

        logger.info(f"Sync completed: {synced} nodes")
        return SyncReport(businesses_seeded=len(seeded), nodes_synced=synced)


async def run_startup_sync(routine: SynchronizationRoutine) -> Optional[SyncReport]:
    """
    Run the routine at process start, logging instead of raising.

    Returns:
        The report, or None if a step failed
    """
    try:
        report = await routine.run()
    except SynchronizationError as e:
        logger.error(f"Error during database initialization: {e}", exc_info=True)
        return None

    logger.info("Database cleaned and reseeded successfully")
    return report
