"""
Graph Database Client for the transaction network.

This module provides a high-level interface over the graph store (Memgraph
or Neo4j, spoken to over Bolt) holding Business nodes and TRANSACTION edges.
Nodes carry only the business_id; names and industries live in the
relational store.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncManagedTransaction
from neo4j.exceptions import DriverError, Neo4jError

from ..utils.constants import BUSINESS_LABEL, TRANSACTION_TYPE
from ..utils.exceptions import GraphDatabaseError

logger = logging.getLogger(__name__)


@dataclass
class EdgeFilter:
    """
    Optional constraints for listing transactions.

    Every field left as None imposes no constraint; the set fields are
    combined with AND. Date and amount bounds are inclusive.
    """

    from_id: Optional[str] = None
    to_id: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None

    def __post_init__(self):
        # An empty query parameter means "not given".
        for name in ("from_id", "to_id", "start_date", "end_date"):
            if getattr(self, name) == "":
                setattr(self, name, None)

    def to_cypher(self) -> tuple[str, dict[str, Any]]:
        """Build the WHERE clause and its parameters."""
        clauses = []
        params: dict[str, Any] = {}

        if self.from_id is not None:
            clauses.append("a.business_id = $from_id")
            params["from_id"] = self.from_id
        if self.to_id is not None:
            clauses.append("b.business_id = $to_id")
            params["to_id"] = self.to_id
        if self.start_date is not None:
            clauses.append("t.timestamp >= $start_date")
            params["start_date"] = self.start_date
        if self.end_date is not None:
            clauses.append("t.timestamp <= $end_date")
            params["end_date"] = self.end_date
        if self.min_amount is not None:
            clauses.append("t.amount >= $min_amount")
            params["min_amount"] = float(self.min_amount)
        if self.max_amount is not None:
            clauses.append("t.amount <= $max_amount")
            params["max_amount"] = float(self.max_amount)

        where = "WHERE " + " AND ".join(clauses) if clauses else ""
        return where, params


class TransactionGraphClient:
    """
    Client for graph database operations.

    Provides methods for:
    - Business node upserts
    - Transaction edge creation
    - Transaction listing, filtering and per-pair aggregation
    - Clearing the whole graph

    Each call opens its own session and closes it before returning, so a
    failed query never leaks a session.
    """

    def __init__(
        self,
        uri: str,
        username: str = "",
        password: str = "",
        database: Optional[str] = None,
    ):
        """
        Initialize the graph client.

        Args:
            uri: Bolt connection URI (e.g., bolt://localhost:7687)
            username: Username, empty for stores without auth (Memgraph default)
            password: Password
            database: Database name, None for the server default
        """
        self.uri = uri
        self.database = database

        auth = (username, password) if username else None
        self.driver: Optional[AsyncDriver] = AsyncGraphDatabase.driver(
            uri, auth=auth, max_connection_lifetime=3600
        )

    async def verify_connectivity(self) -> None:
        """Raise GraphDatabaseError if the store cannot be reached."""
        try:
            await self.driver.verify_connectivity()
        except (DriverError, Neo4jError) as e:
            logger.error(f"Failed to connect to graph store at {self.uri}: {e}")
            raise GraphDatabaseError(str(e)) from e
        logger.info(f"Connected to graph store at {self.uri}")

    async def close(self) -> None:
        """Close the driver connection."""
        if self.driver:
            await self.driver.close()
            self.driver = None
            logger.info("Graph store connection closed")

    async def _execute_query(self, query: str, parameters: dict = None) -> list[dict]:
        """
        Execute a read query and return results.

        Args:
            query: Cypher query string
            parameters: Query parameters

        Returns:
            List of result records as dicts
        """
        try:
            async with self.driver.session(database=self.database) as session:
                result = await session.run(query, parameters or {})
                return await result.data()
        except (DriverError, Neo4jError) as e:
            raise GraphDatabaseError(str(e)) from e

    async def _execute_write(self, query: str, parameters: dict = None) -> list[dict]:
        """
        Execute a single-statement write transaction.

        Args:
            query: Cypher query string
            parameters: Query parameters

        Returns:
            List of result records as dicts
        """
        try:
            async with self.driver.session(database=self.database) as session:
                return await session.execute_write(
                    self._collect, query, parameters or {}
                )
        except (DriverError, Neo4jError) as e:
            raise GraphDatabaseError(str(e)) from e

    @staticmethod
    async def _collect(
        tx: AsyncManagedTransaction, query: str, parameters: dict
    ) -> list[dict]:
        result = await tx.run(query, parameters)
        return await result.data()

    # ==================== Node Operations ====================

    async def find_or_create_node(self, business_id: str) -> dict:
        """
        Upsert the node for a business.

        Args:
            business_id: Business UUID

        Returns:
            Node dict with the business id
        """
        query = f"""
        MERGE (b:{BUSINESS_LABEL} {{business_id: $business_id}})
        RETURN b.business_id AS id
        """
        records = await self._execute_write(query, {"business_id": business_id})
        return {"id": records[0]["id"] if records else business_id}

    async def get_all_nodes(self) -> list[dict]:
        """
        Get all business nodes.

        Returns:
            List of node dicts with only the business id
        """
        query = f"""
        MATCH (b:{BUSINESS_LABEL})
        RETURN b.business_id AS id
        """
        records = await self._execute_query(query)
        return [{"id": record["id"]} for record in records]

    # ==================== Edge Operations ====================

    async def create_edge(
        self, from_id: str, to_id: str, amount: float, timestamp: str
    ) -> Optional[dict]:
        """
        Create a transaction edge between two existing business nodes.

        Never creates nodes: if either endpoint is missing the MATCH yields
        no rows and nothing is written.

        Args:
            from_id: Paying business UUID
            to_id: Receiving business UUID
            amount: Transaction amount
            timestamp: ISO-8601 or epoch-ms string

        Returns:
            The created transaction, or None if an endpoint does not exist
        """
        query = f"""
        MATCH (a:{BUSINESS_LABEL} {{business_id: $from_id}}),
              (b:{BUSINESS_LABEL} {{business_id: $to_id}})
        CREATE (a)-[t:{TRANSACTION_TYPE} {{amount: $amount, timestamp: $timestamp}}]->(b)
        RETURN a.business_id AS `from`, b.business_id AS `to`,
               t.amount AS amount, t.timestamp AS timestamp
        """
        try:
            records = await self._execute_write(
                query,
                {
                    "from_id": from_id,
                    "to_id": to_id,
                    "amount": float(amount),
                    "timestamp": timestamp,
                },
            )
        except GraphDatabaseError as e:
            logger.error(f"Error creating transaction: {e}")
            raise

        if not records:
            logger.error(
                f"Transaction creation failed: could not find businesses with "
                f"IDs {from_id} and/or {to_id}"
            )
            return None

        return records[0]

    async def list_edges(self, edge_filter: Optional[EdgeFilter] = None) -> list[dict]:
        """
        List transactions, most recent first.

        Args:
            edge_filter: Optional constraints; None lists every transaction

        Returns:
            List of transaction dicts (from, to, amount, timestamp)
        """
        where, params = (edge_filter or EdgeFilter()).to_cypher()
        query = f"""
        MATCH (a:{BUSINESS_LABEL})-[t:{TRANSACTION_TYPE}]->(b:{BUSINESS_LABEL})
        {where}
        RETURN a.business_id AS `from`, b.business_id AS `to`,
               t.amount AS amount, t.timestamp AS timestamp
        ORDER BY t.timestamp DESC
        """
        return await self._execute_query(query, params)

    async def aggregate_edges(self) -> list[dict]:
        """
        Summarize transactions per (source, target) pair.

        The id of each aggregate is its 1-based position in this result and
        is not stable between calls.

        Returns:
            List of aggregate edge dicts
        """
        query = f"""
        MATCH (source:{BUSINESS_LABEL})-[t:{TRANSACTION_TYPE}]->(target:{BUSINESS_LABEL})
        RETURN source.business_id AS source,
               target.business_id AS target,
               count(t) AS transactionCount,
               sum(t.amount) AS transactionAmount
        """
        records = await self._execute_query(query)
        return [
            {
                "id": index,
                "source": record["source"],
                "target": record["target"],
                "transactionCount": int(record["transactionCount"] or 0),
                "transactionAmount": float(record["transactionAmount"] or 0),
            }
            for index, record in enumerate(records, start=1)
        ]

    async def count_edges_for_node(self, business_id: str) -> int:
        """
        Count incoming plus outgoing transactions of a business.

        Args:
            business_id: Business UUID

        Returns:
            Transaction count, 0 if the node does not exist
        """
        query = f"""
        OPTIONAL MATCH (b:{BUSINESS_LABEL} {{business_id: $business_id}})
        OPTIONAL MATCH (b)-[outgoing:{TRANSACTION_TYPE}]->()
        OPTIONAL MATCH ()-[incoming:{TRANSACTION_TYPE}]->(b)
        RETURN count(DISTINCT outgoing) + count(DISTINCT incoming) AS transactionCount
        """
        records = await self._execute_query(query, {"business_id": business_id})
        if not records or records[0]["transactionCount"] is None:
            return 0
        return int(records[0]["transactionCount"])

    # ==================== Maintenance ====================

    async def clear_all(self) -> None:
        """Delete every relationship, then every node."""
        await self._execute_write("MATCH ()-[r]->() DELETE r")
        logger.info("Cleared all graph relationships")

        await self._execute_write("MATCH (n) DELETE n")
        logger.info("Cleared all graph nodes")
