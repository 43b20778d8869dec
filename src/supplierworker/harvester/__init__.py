"""
Harvester module for Oracle Fusion supplier extraction.

Components:
- pager: offset pagination with explicit page outcomes
- retry: fixed-delay retry policy
- tables: child table definitions and fetcher
- render: markdown tables and supplier documents
- collector: supplier paging, incremental filter, document assembly
- state: durable last-run cutoff
- orchestrator: token -> collect -> upload -> cutoff
"""

from .collector import SupplierCollector
from .orchestrator import RunStatus, SyncOrchestrator, SyncResult, run_sync
from .state import CutoffStore
from .tables import SUPPLIER_TABLES, ChildTable, ChildTableFetcher

__all__ = [
    "SupplierCollector",
    "SyncOrchestrator",
    "SyncResult",
    "RunStatus",
    "run_sync",
    "CutoffStore",
    "SUPPLIER_TABLES",
    "ChildTable",
    "ChildTableFetcher",
]
