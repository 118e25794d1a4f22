"""Services layer: enrichment, synchronization, notifications and CRUD flows."""

from __future__ import annotations

from .business_service import BusinessService
from .enrichment import EnrichmentService
from .notification import ConnectionHub, NotificationService
from .sync import SyncReport, SynchronizationRoutine, run_startup_sync
from .transaction_service import TransactionService

__all__ = [
    "BusinessService",
    "ConnectionHub",
    "EnrichmentService",
    "NotificationService",
    "SyncReport",
    "SynchronizationRoutine",
    "TransactionService",
    "run_startup_sync",
]
