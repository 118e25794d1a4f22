"""
Application constants for txnet.

This module contains the default values and fixed timings used throughout
the application.
"""

from __future__ import annotations

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

# Graph store labels
BUSINESS_LABEL = "Business"
TRANSACTION_TYPE = "TRANSACTION"

# Push channel event names
INITIAL_DATA_EVENT = "initialData"
GRAPH_UPDATE_EVENT = "graphUpdate"

# Live client timings
HIGHLIGHT_DURATION_SECONDS = 3.0
HIGHLIGHT_TICK_SECONDS = 0.1

# Live client layout
FULL_LAYOUT_ITERATIONS = 50
INCREMENTAL_LAYOUT_ITERATIONS = 10

# Simulator defaults
DEFAULT_MAX_AMOUNT = 10_000
SIMULATOR_REQUEST_TIMEOUT = 10.0  # seconds
