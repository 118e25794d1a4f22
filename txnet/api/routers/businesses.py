"""Business endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.business import BusinessCreateRequest
from ..state import AppState, get_app_state

router = APIRouter(prefix="/api/businesses", tags=["businesses"])


@router.get("")
async def list_businesses(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """List all businesses from the relational store."""
    businesses = await state.business_service.list_businesses()
    return {"success": True, "data": businesses}


@router.post("", status_code=201)
async def create_business(
    request: BusinessCreateRequest, state: AppState = Depends(get_app_state)
) -> Dict[str, Any]:
    """Create a business in the relational store and the graph store.

    Returns:
        The store row id and the generated business id.

    Raises:
        HTTPException: 400 if name or industry is missing.
    """
    if not request.name or not request.industry:
        raise HTTPException(status_code=400, detail="Name and industry are required")

    created = await state.business_service.create_business(
        request.name, request.industry
    )
    return {"success": True, "data": created}


@router.get("/transactions")
async def list_enriched_transactions(
    from_: Optional[str] = Query(None, alias="from"),
    to: Optional[str] = None,
    state: AppState = Depends(get_app_state),
) -> Dict[str, Any]:
    """List transactions with business names in place of ids."""
    transactions = await state.enrichment.get_enriched_transactions(from_, to)
    return {"success": True, "data": transactions}


@router.get("/{business_id}/transaction-count")
async def get_transaction_count(
    business_id: str, state: AppState = Depends(get_app_state)
) -> Dict[str, Any]:
    """Count incoming and outgoing transactions of a business."""
    if not business_id.strip():
        raise HTTPException(status_code=400, detail="Business ID is required")

    result = await state.business_service.get_transaction_count(business_id)
    return {"success": True, "data": result}
