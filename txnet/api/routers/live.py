"""Push channel for live graph updates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from ...utils.constants import INITIAL_DATA_EVENT
from ..state import AppState, get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


@router.websocket("/ws")
async def live_updates(websocket: WebSocket, state: AppState = Depends(get_app_state)):
    """WebSocket endpoint for live graph updates.

    Sends the enriched graph once as initialData, then registers the
    connection so graphUpdate broadcasts reach it. A client never sees
    initialData after a graphUpdate. Incoming messages are ignored.
    """
    await websocket.accept()

    try:
        try:
            graph = await state.enrichment.get_enriched_graph()
            await state.connections.send(websocket, INITIAL_DATA_EVENT, graph)
        except WebSocketDisconnect:
            raise
        except Exception as e:
            logger.error(f"Error sending initial data: {e}", exc_info=True)

        state.connections.register(websocket)

        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        state.connections.disconnect(websocket)
