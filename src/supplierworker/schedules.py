"""
Temporal Schedules for the supplier sync.

Provides utilities for creating and managing the periodic sync runs.

Usage:
    # CLI
    python -m supplierworker schedules create
    python -m supplierworker schedules list
    python -m supplierworker schedules delete supplier-sync-hourly

    # Python
    from supplierworker.schedules import create_default_schedules
    await create_default_schedules(client)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from temporalio.client import Client, Schedule, ScheduleActionStartWorkflow, ScheduleSpec

from .config import get_config
from .core.worker import get_temporal_client
from .workflows import SupplierSyncWorkflow

logger = logging.getLogger(__name__)


@dataclass
class ScheduleConfig:
    """Configuration for a scheduled sync."""

    schedule_id: str
    cron: str
    incremental_only: bool = True
    description: str = ""


# Default schedules for the supplier sync
DEFAULT_SCHEDULES = [
    ScheduleConfig(
        schedule_id="supplier-sync-hourly",
        cron="0 * * * *",  # Every hour
        incremental_only=True,
        description="Hourly sync of suppliers modified since the last run",
    ),
    ScheduleConfig(
        schedule_id="supplier-sync-weekly-full",
        cron="0 2 * * 0",  # Sundays at 2 AM
        incremental_only=False,
        description="Weekly full sync of all suppliers",
    ),
]


async def create_schedule(
    client: Client,
    config: ScheduleConfig,
    task_queue: Optional[str] = None,
) -> str:
    """Create a Temporal schedule for the sync workflow.

    Returns:
        Schedule ID
    """
    task_queue = task_queue or get_config().task_queue

    try:
        await client.create_schedule(
            config.schedule_id,
            Schedule(
                action=ScheduleActionStartWorkflow(
                    SupplierSyncWorkflow.run,
                    config.incremental_only,
                    id=f"{config.schedule_id}-run",
                    task_queue=task_queue,
                ),
                spec=ScheduleSpec(
                    cron_expressions=[config.cron],
                ),
            ),
        )
        logger.info(f"Created schedule: {config.schedule_id}")
        return config.schedule_id
    except Exception as e:
        if "already exists" in str(e).lower():
            logger.warning(f"Schedule {config.schedule_id} already exists")
            return config.schedule_id
        raise


async def create_default_schedules(
    client: Client = None,
    temporal_host: str = None,
) -> List[str]:
    """Create all default schedules.

    Returns:
        List of created schedule IDs
    """
    if client is None:
        client = await get_temporal_client(temporal_host)

    schedule_ids = []
    for config in DEFAULT_SCHEDULES:
        try:
            sid = await create_schedule(client, config)
            schedule_ids.append(sid)
        except Exception as e:
            logger.error(f"Failed to create schedule {config.schedule_id}: {e}")

    return schedule_ids


async def list_schedules(client: Client = None, temporal_host: str = None) -> List[dict]:
    """List all schedules."""
    if client is None:
        client = await get_temporal_client(temporal_host)

    schedules = []
    async for schedule in await client.list_schedules():
        action = schedule.schedule.action if schedule.schedule else None
        schedules.append({
            "id": schedule.id,
            "workflow": getattr(action, "workflow", None),
        })

    return schedules


async def delete_schedule(
    schedule_id: str,
    client: Client = None,
    temporal_host: str = None,
) -> bool:
    """Delete a schedule by ID."""
    if client is None:
        client = await get_temporal_client(temporal_host)

    try:
        handle = client.get_schedule_handle(schedule_id)
        await handle.delete()
        logger.info(f"Deleted schedule: {schedule_id}")
        return True
    except Exception as e:
        logger.error(f"Failed to delete schedule {schedule_id}: {e}")
        return False
