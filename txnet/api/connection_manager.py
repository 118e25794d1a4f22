"""WebSocket connection hub for pushing graph updates to live clients."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def _encode(event: str, data: Any) -> str:
    return json.dumps(
        {
            "type": event,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


class ConnectionManager:
    """Manages WebSocket connections for live graph updates."""

    def __init__(self):
        """Initialize connection manager."""
        self.active_connections: List[WebSocket] = []

    def register(self, websocket: WebSocket):
        """Track an accepted WebSocket connection for broadcasts.

        Args:
            websocket: Connection that already received its initial data.
        """
        self.active_connections.append(websocket)
        logger.info(f"Client connected ({len(self.active_connections)} active)")

    def disconnect(self, websocket: WebSocket):
        """Remove WebSocket connection from tracking.

        Args:
            websocket: WebSocket connection to remove.
        """
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"Client disconnected ({len(self.active_connections)} active)")

    async def send(self, websocket: WebSocket, event: str, data: Any):
        """Send one event to a single client.

        Args:
            websocket: Target connection.
            event: Event name, sent as the message type.
            data: JSON-serializable payload.
        """
        await websocket.send_text(_encode(event, data))

    async def broadcast(self, event: str, data: Any):
        """Broadcast an event to all connected clients.

        Args:
            event: Event name, sent as the message type.
            data: JSON-serializable payload.
        """
        message_json = _encode(event, data)
        # Send to all connections, removing failed ones
        disconnected = []
        for connection in list(self.active_connections):
            try:
                await connection.send_text(message_json)
            except Exception as e:
                logger.warning(f"Dropping connection after failed send: {e}")
                disconnected.append(connection)

        # Clean up failed connections
        for conn in disconnected:
            self.disconnect(conn)
