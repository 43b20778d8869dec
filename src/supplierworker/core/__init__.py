"""
SupplierWorker Core - Temporal worker infrastructure.

Provides:
- Temporal client/worker factory for the supplier sync queue
"""

from .worker import create_worker, get_temporal_client, run_worker

__all__ = [
    "create_worker",
    "get_temporal_client",
    "run_worker",
]
