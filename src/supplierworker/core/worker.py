"""
Temporal Worker Factory.

Creates and runs the Temporal worker hosting the supplier sync.
"""

from __future__ import annotations

import logging
from typing import List

from temporalio.client import Client
from temporalio.worker import Worker

logger = logging.getLogger(__name__)


async def get_temporal_client(host: str = None) -> Client:
    """Get Temporal client connection (host from config if not provided)."""
    if host is None:
        from ..config import get_config

        host = get_config().temporal_host
    return await Client.connect(host)


async def create_worker(
    client: Client,
    queue: str,
    workflows: List = None,
    activities: List = None,
) -> Worker:
    """Create a Temporal worker for a specific queue."""
    return Worker(
        client,
        task_queue=queue,
        workflows=workflows or [],
        activities=activities or [],
    )


async def run_worker(temporal_host: str = None, queue: str = None) -> None:
    """Run the worker for the supplier sync queue until cancelled.

    Args:
        temporal_host: Temporal server address
        queue: Task queue (default: TEMPORAL_TASK_QUEUE from config)
    """
    from ..activities import sync_suppliers
    from ..config import get_config
    from ..workflows import SupplierSyncWorkflow

    queue = queue or get_config().task_queue
    client = await get_temporal_client(temporal_host)

    workflows = [SupplierSyncWorkflow]
    activities = [sync_suppliers]
    worker = await create_worker(client, queue, workflows, activities)

    logger.info(f"Created worker for queue: {queue}")
    logger.info(f"  Workflows: {[w.__name__ for w in workflows]}")
    logger.info(f"  Activities: {[a.__name__ for a in activities]}")
    logger.info("--- Starting worker ---")

    await worker.run()
