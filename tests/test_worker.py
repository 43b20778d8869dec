"""Tests for the Temporal activity and worker wiring."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from supplierworker.activities import sync_suppliers
from supplierworker.core import worker as worker_module
from supplierworker.workflows import SupplierSyncWorkflow


class TestSyncActivity:
    """Test the sync activity delegates to run_sync."""

    @pytest.mark.asyncio
    async def test_passes_mode_through(self):
        with patch(
            "supplierworker.activities.run_sync",
            new=AsyncMock(return_value={"status": "success"}),
        ) as run_sync:
            result = await sync_suppliers(False)

        assert result == {"status": "success"}
        run_sync.assert_awaited_once_with(incremental_only=False)


class TestRunWorker:
    """Test the worker is created for the sync queue."""

    @pytest.mark.asyncio
    async def test_registers_workflow_and_activity(self):
        worker = MagicMock()
        worker.run = AsyncMock()
        client = MagicMock()

        with (
            patch.object(worker_module, "get_temporal_client", new=AsyncMock(return_value=client)),
            patch.object(worker_module, "create_worker", new=AsyncMock(return_value=worker)) as create,
        ):
            await worker_module.run_worker(temporal_host="temporal:7233", queue="sync-q")

        create.assert_awaited_once_with(client, "sync-q", [SupplierSyncWorkflow], [sync_suppliers])
        worker.run.assert_awaited_once()
