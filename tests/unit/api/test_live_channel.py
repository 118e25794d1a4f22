"""Tests for the /ws handler's ordering of initial data and registration."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import WebSocketDisconnect

from txnet.api.routers.live import live_updates


@pytest.mark.asyncio
async def test_initial_data_sent_before_registration(app_state):
    connections = app_state.connections
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    sent = []
    registered_while_listening = []

    async def send_text(text):
        sent.append((json.loads(text)["type"], websocket in connections.active_connections))

    async def receive_text():
        registered_while_listening.append(websocket in connections.active_connections)
        raise WebSocketDisconnect()

    websocket.send_text = send_text
    websocket.receive_text = receive_text

    await live_updates(websocket, app_state)

    websocket.accept.assert_awaited_once()
    assert sent == [("initialData", False)]
    assert registered_while_listening == [True]
    assert connections.active_connections == []


@pytest.mark.asyncio
async def test_unregistered_socket_misses_broadcast(app_state):
    websocket = MagicMock()
    websocket.send_text = AsyncMock()

    await app_state.connections.broadcast("graphUpdate", {})
    websocket.send_text.assert_not_called()

    app_state.connections.register(websocket)
    await app_state.connections.broadcast("graphUpdate", {})
    websocket.send_text.assert_awaited_once()
