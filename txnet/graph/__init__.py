"""
Graph module for transaction topology.

This module provides the client for the graph store holding Business nodes
and TRANSACTION edges.
"""

from __future__ import annotations

from .graph_client import EdgeFilter, TransactionGraphClient

__all__ = ["EdgeFilter", "TransactionGraphClient"]
