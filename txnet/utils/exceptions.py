"""
Custom exception hierarchy for txnet.

This module defines the exceptions raised across the storage, graph and
service layers, so the API can map each category to a response.
"""

from __future__ import annotations


class TxNetError(Exception):
    """Base exception for all txnet errors."""

    pass


class ConfigurationError(TxNetError):
    """Raised when configuration is invalid or missing."""

    pass


class GraphDatabaseError(TxNetError):
    """Raised for graph database operations errors."""

    pass


class RelationalStoreError(TxNetError):
    """Raised for relational store operations errors."""

    pass


class UnknownBusinessError(TxNetError):
    """Raised when a transaction references a business with no graph node."""

    def __init__(self, from_id: str, to_id: str):
        self.from_id = from_id
        self.to_id = to_id
        super().__init__(
            f"Transaction creation failed: could not find businesses with IDs "
            f"{from_id} and/or {to_id}"
        )


class CrossStoreWriteError(TxNetError):
    """Raised when a write reached the relational store but not the graph store."""

    def __init__(self, business_id: str, cause: Exception):
        self.business_id = business_id
        self.cause = cause
        super().__init__(str(cause))


class SynchronizationError(TxNetError):
    """Raised when a step of the startup synchronization fails."""

    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"Synchronization failed during '{step}': {cause}")
