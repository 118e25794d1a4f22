"""
Utility modules for txnet.

Common exceptions, constants and logging configuration used throughout the
application.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_LOG_LEVEL,
    GRAPH_UPDATE_EVENT,
    HIGHLIGHT_DURATION_SECONDS,
    INITIAL_DATA_EVENT,
    LOG_FORMAT,
)
from .exceptions import (
    ConfigurationError,
    CrossStoreWriteError,
    GraphDatabaseError,
    RelationalStoreError,
    SynchronizationError,
    TxNetError,
    UnknownBusinessError,
)
from .logging_config import RequestIDFilter, setup_logging

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "GRAPH_UPDATE_EVENT",
    "HIGHLIGHT_DURATION_SECONDS",
    "INITIAL_DATA_EVENT",
    "LOG_FORMAT",
    "ConfigurationError",
    "CrossStoreWriteError",
    "GraphDatabaseError",
    "RelationalStoreError",
    "SynchronizationError",
    "TxNetError",
    "UnknownBusinessError",
    "RequestIDFilter",
    "setup_logging",
]
