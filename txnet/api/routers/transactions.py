"""Transaction and graph endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...graph.graph_client import EdgeFilter
from ..models.graph import TransactionCreateRequest
from ..state import AppState, get_app_state

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("")
async def list_transactions(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    state: AppState = Depends(get_app_state),
) -> Dict[str, Any]:
    """List transactions with raw business ids, most recent first."""
    transactions = await state.transaction_service.list_transactions(from_, to)
    return {"success": True, "data": transactions}


@router.get("/nodes")
async def list_nodes(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """List business nodes labelled with names and industries."""
    graph = await state.enrichment.get_enriched_graph()
    return {"success": True, "data": graph["nodes"]}


@router.get("/edges")
async def list_edges(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """List aggregate edges, one per (source, target) pair."""
    edges = await state.graph.aggregate_edges()
    return {"success": True, "data": edges}


@router.get("/filter")
async def filter_transactions(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    min_amount: Optional[float] = Query(None, alias="minAmount"),
    max_amount: Optional[float] = Query(None, alias="maxAmount"),
    state: AppState = Depends(get_app_state),
) -> Dict[str, Any]:
    """Filter transactions by business, inclusive date range and amount range.

    A contradictory range simply matches nothing.
    """
    edge_filter = EdgeFilter(
        from_id=from_,
        to_id=to,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    transactions = await state.transaction_service.filter_transactions(edge_filter)
    return {"success": True, "data": transactions}


@router.post("")
async def create_transaction(
    request: TransactionCreateRequest, state: AppState = Depends(get_app_state)
) -> Dict[str, Any]:
    """Create a transaction and push the updated graph to live clients.

    Raises:
        UnknownBusinessError: If either business has no graph node (404).
    """
    transaction = await state.transaction_service.create_transaction(
        request.from_, request.to, request.amount, request.timestamp
    )

    enriched = await state.enrichment.enrich_transaction(transaction)
    await state.notifications.broadcast_update(state.connections, enriched)

    return {"success": True, "data": transaction}
