"""Tests for graph update broadcasts."""

from unittest.mock import AsyncMock

import pytest

from txnet.services import EnrichmentService, NotificationService


@pytest.mark.asyncio
async def test_broadcast_sends_full_graph(graph, business_store):
    await business_store.create("a", "Alpha", "Retail")
    await graph.find_or_create_node("a")
    hub = AsyncMock()
    service = NotificationService(EnrichmentService(graph, business_store))
    transaction = {"from": "Alpha", "to": "Alpha", "amount": 1.0, "timestamp": "t"}

    await service.broadcast_update(hub, transaction)

    hub.broadcast.assert_awaited_once()
    event, data = hub.broadcast.call_args[0]
    assert event == "graphUpdate"
    assert data["nodes"] == [{"id": "a", "label": "Alpha", "industry": "Retail"}]
    assert data["edges"] == []
    assert data["newTransaction"] == transaction


@pytest.mark.asyncio
async def test_no_hub_is_noop(graph, business_store):
    service = NotificationService(EnrichmentService(graph, business_store))

    await service.broadcast_update(None, {})

    assert graph.calls == []
