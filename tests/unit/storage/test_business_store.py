"""Tests for the relational business store on an in-memory DuckDB."""

from unittest.mock import AsyncMock

import pytest

from txnet.storage import DEMO_BUSINESSES, BusinessStore, DuckDBClient, SeedBusiness
from txnet.utils.exceptions import RelationalStoreError


@pytest.mark.asyncio
async def test_create_and_find(business_store):
    row_id = await business_store.create("b-1", "Acme", "Retail")

    assert isinstance(row_id, int)
    business = await business_store.find_by_id("b-1")
    assert business == {"id": row_id, "business_id": "b-1", "name": "Acme", "industry": "Retail"}


@pytest.mark.asyncio
async def test_find_missing_returns_none(business_store):
    assert await business_store.find_by_id("nope") is None


@pytest.mark.asyncio
async def test_list_all_in_insertion_order(business_store):
    await business_store.create("b-1", "First", "A")
    await business_store.create("b-2", "Second", "B")

    names = [b["name"] for b in await business_store.list_all()]
    assert names == ["First", "Second"]


@pytest.mark.asyncio
async def test_duplicate_business_id_rejected(business_store):
    await business_store.create("b-1", "Acme", "Retail")

    with pytest.raises(RelationalStoreError):
        await business_store.create("b-1", "Other", "Retail")


@pytest.mark.asyncio
async def test_batch_get_details_only_known_ids(business_store):
    await business_store.create("b-1", "Acme", "Retail")
    await business_store.create("b-2", "Globex", "Energy")

    details = await business_store.batch_get_details(["b-1", "unknown", "b-1"])

    assert details.name_map == {"b-1": "Acme"}
    assert details.industry_map == {"b-1": "Retail"}


@pytest.mark.asyncio
async def test_batch_get_details_empty_skips_store():
    client = AsyncMock(spec=DuckDBClient)
    store = BusinessStore(client)

    details = await store.batch_get_details([])

    assert details.name_map == {}
    assert details.industry_map == {}
    client.fetchall.assert_not_called()


@pytest.mark.asyncio
async def test_get_all_details(business_store):
    await business_store.create("b-1", "Acme", "Retail")

    details = await business_store.get_all_details()
    assert details.name_map == {"b-1": "Acme"}


@pytest.mark.asyncio
async def test_reset_replaces_rows_with_seed(business_store):
    await business_store.create("old", "Old Co", "Legacy")

    seeded = await business_store.reset(DEMO_BUSINESSES)

    businesses = await business_store.list_all()
    assert len(seeded) == len(businesses) == 12
    assert await business_store.find_by_id("old") is None
    ids = [b["business_id"] for b in businesses]
    assert len(set(ids)) == len(ids)


@pytest.mark.asyncio
async def test_reset_generates_fresh_ids(business_store):
    first = await business_store.reset([SeedBusiness("Acme", "Retail")])
    second = await business_store.reset([SeedBusiness("Acme", "Retail")])

    assert first[0]["business_id"] != second[0]["business_id"]


def test_client_requires_initialize():
    client = DuckDBClient(":memory:")

    assert not client.is_initialized
    with pytest.raises(RuntimeError):
        with client.connection():
            pass


@pytest.mark.asyncio
async def test_persistent_database(tmp_path):
    path = tmp_path / "nested" / "txnet.duckdb"
    client = DuckDBClient(str(path))
    client.initialize()
    await BusinessStore(client).create("b-1", "Acme", "Retail")
    client.close()

    reopened = DuckDBClient(str(path))
    reopened.initialize()
    try:
        assert await BusinessStore(reopened).find_by_id("b-1") is not None
    finally:
        reopened.close()
