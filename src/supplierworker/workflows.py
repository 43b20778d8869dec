"""Temporal workflows for SupplierWorker.

Workflows orchestrate activities and provide durability and scheduling
for the periodic supplier sync.
"""

from __future__ import annotations

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from .activities import sync_suppliers


@workflow.defn
class SupplierSyncWorkflow:
    """Workflow running one supplier sync.

    The activity gets a single attempt: a failed run is not replayed, the
    next scheduled run picks up from the stored cutoff.
    """

    @workflow.run
    async def run(self, incremental_only: bool = True) -> dict:
        """Execute the supplier sync.

        Args:
            incremental_only: Only suppliers modified since the last run

        Returns:
            Result dict of the sync activity
        """
        return await workflow.execute_activity(
            sync_suppliers,
            incremental_only,
            start_to_close_timeout=timedelta(hours=2),
            retry_policy=RetryPolicy(maximum_attempts=1),
        )
