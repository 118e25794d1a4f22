"""API routers for txnet."""

from __future__ import annotations

from . import businesses, health, live, transactions

__all__ = [
    "businesses",
    "health",
    "live",
    "transactions",
]
