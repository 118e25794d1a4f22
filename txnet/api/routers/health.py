"""Health and monitoring endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..state import AppState, get_app_state

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """Check connectivity of both stores.

    Returns:
        Overall status, per-store status and the number of live clients.
    """
    services: Dict[str, str] = {"api": "up", "graph": "unknown", "relational": "unknown"}

    try:
        await state.graph.verify_connectivity()
        services["graph"] = "up"
    except Exception as e:
        logger.warning(f"Graph store health check failed: {e}")
        services["graph"] = "down"

    try:
        await state.businesses.client.fetchone("SELECT 1")
        services["relational"] = "up"
    except Exception as e:
        logger.warning(f"Relational store health check failed: {e}")
        services["relational"] = "down"

    status = "healthy" if all(v == "up" for v in services.values()) else "degraded"
    return {
        "status": status,
        "services": services,
        "live_clients": len(state.connections.active_connections),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
