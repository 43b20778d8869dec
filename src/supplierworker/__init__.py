"""
SupplierWorker - Oracle Fusion supplier sync into Microsoft Graph.

Pulls supplier records and their child tables from Oracle Fusion,
renders each supplier as a markdown document and upserts it as an
external item of a Microsoft Graph connection.

Usage:
    from supplierworker import run_sync

    result = await run_sync(incremental_only=True)
"""

__version__ = "0.1.0"

from .config import WorkerConfig, get_config
from .core.worker import get_temporal_client, run_worker
from .harvester import RunStatus, SyncOrchestrator, SyncResult, run_sync
from .models import Supplier
from .schedules import create_schedule, delete_schedule, list_schedules

__all__ = [
    "__version__",
    # Config
    "WorkerConfig",
    "get_config",
    # Sync
    "Supplier",
    "SyncOrchestrator",
    "SyncResult",
    "RunStatus",
    "run_sync",
    # Temporal
    "get_temporal_client",
    "run_worker",
    "create_schedule",
    "list_schedules",
    "delete_schedule",
]
