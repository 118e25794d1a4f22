"""
Relational storage layer for businesses.

Provides CRUD operations over the businesses table. The store is the source
of truth for business identity and attributes; the graph store only keeps
the business_id on each node.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .duckdb_client import DuckDBClient
from .seed import SeedBusiness

logger = logging.getLogger(__name__)

_COLUMNS = "id, business_id, name, industry"


@dataclass
class BusinessDetails:
    """Name and industry lookups keyed by business_id."""

    name_map: dict[str, str] = field(default_factory=dict)
    industry_map: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, rows: Iterable[tuple]) -> "BusinessDetails":
        details = cls()
        for business_id, name, industry in rows:
            details.name_map[business_id] = name
            details.industry_map[business_id] = industry
        return details


def _row_to_business(row: tuple) -> dict:
    return {
        "id": row[0],
        "business_id": row[1],
        "name": row[2],
        "industry": row[3],
    }


class BusinessStore:
    """
    CRUD operations for the businesses table.

    There is no update or delete path: businesses are immutable once created.
    """

    def __init__(self, client: DuckDBClient):
        self.client = client

    async def list_all(self) -> list[dict]:
        """
        List all businesses in insertion order.

        Returns:
            List of business dicts
        """
        rows = await self.client.fetchall(
            f"SELECT {_COLUMNS} FROM businesses ORDER BY id"
        )
        return [_row_to_business(row) for row in rows]

    async def find_by_id(self, business_id: str) -> Optional[dict]:
        """
        Get a business by its business_id.

        Args:
            business_id: Business UUID

        Returns:
            Business dict or None if not found
        """
        row = await self.client.fetchone(
            f"SELECT {_COLUMNS} FROM businesses WHERE business_id = ?",
            (business_id,),
        )
        return _row_to_business(row) if row else None

    async def create(self, business_id: str, name: str, industry: str) -> int:
        """
        Insert a new business.

        Args:
            business_id: Business UUID, generated by the caller
            name: Business name
            industry: Business industry

        Returns:
            Store-assigned row id
        """
        rows = await self.client.execute_write(
            """
            INSERT INTO businesses (business_id, name, industry)
            VALUES (?, ?, ?)
            RETURNING id
            """,
            (business_id, name, industry),
        )
        row_id = rows[0][0]
        logger.info(f"Created business {business_id} ({name}) with row id {row_id}")
        return row_id

    async def batch_get_details(self, business_ids: Iterable[str]) -> BusinessDetails:
        """
        Get names and industries for a set of business ids in one query.

        Ids with no matching row are absent from both maps. An empty input
        returns empty maps without touching the store.

        Args:
            business_ids: Business UUIDs to look up

        Returns:
            BusinessDetails with name and industry maps
        """
        ids = list(dict.fromkeys(business_ids))
        if not ids:
            return BusinessDetails()

        placeholders = ", ".join("?" for _ in ids)
        rows = await self.client.fetchall(
            f"""
            SELECT business_id, name, industry
            FROM businesses
            WHERE business_id IN ({placeholders})
            """,
            tuple(ids),
        )
        return BusinessDetails.from_rows(rows)

    async def get_all_details(self) -> BusinessDetails:
        """Get name and industry maps for every business."""
        rows = await self.client.fetchall(
            "SELECT business_id, name, industry FROM businesses"
        )
        return BusinessDetails.from_rows(rows)

    async def reset(self, seed: Iterable[SeedBusiness]) -> list[dict]:
        """
        Truncate the table and insert the seed businesses with fresh ids.

        Args:
            seed: Businesses to insert

        Returns:
            The inserted businesses
        """
        seeded = [
            (str(uuid.uuid4()), business.name, business.industry) for business in seed
        ]
        statements: list[tuple[str, tuple]] = [("DELETE FROM businesses", ())]
        statements.extend(
            (
                f"INSERT INTO businesses (business_id, name, industry) "
                f"VALUES (?, ?, ?) RETURNING {_COLUMNS}",
                row,
            )
            for row in seeded
        )
        results = await self.client.execute_many(statements)

        businesses = [_row_to_business(rows[0]) for rows in results[1:]]
        for business in businesses:
            logger.debug(
                f"Inserted business: {business['name']}, "
                f"Industry: {business['industry']}, UUID: {business['business_id']}"
            )
        logger.info(f"Reseeded businesses table with {len(businesses)} rows")
        return businesses
