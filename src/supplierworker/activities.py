"""Temporal activities for SupplierWorker.

Activities are the building blocks of workflows - they represent
individual units of work that can be retried and monitored.
"""

from __future__ import annotations

import logging
from typing import Any

from temporalio import activity

from .harvester.orchestrator import run_sync

logger = logging.getLogger(__name__)


@activity.defn
async def sync_suppliers(incremental_only: bool = True) -> dict[str, Any]:
    """Activity to run one Oracle Fusion -> Graph supplier sync.

    Args:
        incremental_only: Only suppliers modified since the stored cutoff

    Returns:
        SyncResult as a dict (status, counts, failed ids, error)
    """
    mode = "incremental" if incremental_only else "full"
    logger.info(f"Running {mode} supplier sync activity")
    return await run_sync(incremental_only=incremental_only)
