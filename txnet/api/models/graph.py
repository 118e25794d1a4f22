"""Graph and transaction models shared by the API and the live client."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Transaction(BaseModel):
    """A single directed transaction between two businesses."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from", description="Paying business id or name")
    to: str = Field(..., description="Receiving business id or name")
    amount: float = Field(..., ge=0)
    timestamp: str = Field(..., description="ISO-8601 or epoch-ms string")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _timestamp_to_string(cls, value: Union[int, float, str]) -> str:
        # Epoch milliseconds arrive as numbers from the simulator.
        if isinstance(value, bool):
            raise ValueError("timestamp must be a string or a number")
        if isinstance(value, (int, float)):
            return str(int(value))
        return value


class TransactionCreateRequest(Transaction):
    """Request model for creating a transaction between two business ids."""


class EnrichedTransaction(Transaction):
    """A transaction with names in from/to and the business ids alongside."""

    fromId: Optional[str] = None
    toId: Optional[str] = None


class GraphNode(BaseModel):
    """A business node, labelled by enrichment."""

    id: str
    label: Optional[str] = None
    industry: Optional[str] = None


class GraphEdge(BaseModel):
    """Aggregate of all transactions from source to target.

    The id is the position in the current result and is not stable.
    """

    id: int
    source: str
    target: str
    transactionCount: int
    transactionAmount: float


class GraphPayload(BaseModel):
    """Message body of the initialData and graphUpdate push events."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    newTransaction: Optional[EnrichedTransaction] = None
