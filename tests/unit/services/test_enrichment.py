"""Tests for joining graph results with relational attributes."""

import asyncio

import pytest

from txnet.services import EnrichmentService


@pytest.fixture
async def seeded(graph, business_store):
    await business_store.create("a", "Alpha", "Retail")
    await business_store.create("b", "Beta", "Energy")
    for business_id in ("a", "b", "ghost"):
        await graph.find_or_create_node(business_id)
    return EnrichmentService(graph, business_store)


@pytest.mark.asyncio
async def test_enriched_graph_labels_nodes(seeded, graph):
    await graph.create_edge("a", "b", 10, "1")

    result = await seeded.get_enriched_graph()

    nodes = {n["id"]: n for n in result["nodes"]}
    assert nodes["a"] == {"id": "a", "label": "Alpha", "industry": "Retail"}
    assert nodes["ghost"]["label"] is None
    assert nodes["ghost"]["industry"] is None
    assert result["edges"][0]["source"] == "a"


@pytest.mark.asyncio
async def test_enriched_transactions_fall_back_to_ids(seeded, graph):
    await graph.create_edge("a", "ghost", 10, "1")
    await graph.create_edge("a", "b", 20, "2")

    transactions = await seeded.get_enriched_transactions(from_id="a")

    assert transactions == [
        {"from": "Alpha", "to": "Beta", "amount": 20.0, "timestamp": "2"},
        {"from": "Alpha", "to": "ghost", "amount": 10.0, "timestamp": "1"},
    ]


@pytest.mark.asyncio
async def test_enrich_single_transaction(seeded):
    enriched = await seeded.enrich_transaction(
        {"from": "b", "to": "ghost", "amount": 1.0, "timestamp": "t"}
    )

    assert enriched["from"] == "Beta"
    assert enriched["to"] == "ghost"
    assert enriched["amount"] == 1.0


@pytest.mark.asyncio
async def test_enrich_single_transaction_keeps_ids(seeded):
    enriched = await seeded.enrich_transaction(
        {"from": "a", "to": "b", "amount": 1.0, "timestamp": "t"}
    )

    assert (enriched["from"], enriched["to"]) == ("Alpha", "Beta")
    assert (enriched["fromId"], enriched["toId"]) == ("a", "b")


@pytest.mark.asyncio
async def test_transactions_and_details_fetched_concurrently(
    seeded, graph, business_store, monkeypatch
):
    await graph.create_edge("a", "b", 10, "1")
    details_requested = asyncio.Event()
    list_edges = graph.list_edges
    get_all_details = business_store.get_all_details

    async def waiting_list_edges(edge_filter=None):
        # Only completes if the details fetch starts without waiting for it.
        await asyncio.wait_for(details_requested.wait(), timeout=1)
        return await list_edges(edge_filter)

    async def signalling_get_all_details():
        details_requested.set()
        return await get_all_details()

    monkeypatch.setattr(graph, "list_edges", waiting_list_edges)
    monkeypatch.setattr(business_store, "get_all_details", signalling_get_all_details)

    transactions = await seeded.get_enriched_transactions()

    assert transactions == [{"from": "Alpha", "to": "Beta", "amount": 10.0, "timestamp": "1"}]
