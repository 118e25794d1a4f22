"""API request and response models."""

from __future__ import annotations

from .business import BusinessCreateRequest
from .error import ErrorResponse
from .graph import (
    EnrichedTransaction,
    GraphEdge,
    GraphNode,
    GraphPayload,
    Transaction,
    TransactionCreateRequest,
)

__all__ = [
    "BusinessCreateRequest",
    "ErrorResponse",
    "EnrichedTransaction",
    "GraphEdge",
    "GraphNode",
    "GraphPayload",
    "Transaction",
    "TransactionCreateRequest",
]
