"""
Tests for ScheduleConfig and scheduling utilities.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from supplierworker.schedules import (
    DEFAULT_SCHEDULES,
    ScheduleConfig,
    create_default_schedules,
    create_schedule,
    delete_schedule,
)


class TestScheduleConfig:
    """Test ScheduleConfig dataclass."""

    def test_schedule_config_defaults(self):
        config = ScheduleConfig(schedule_id="test-schedule", cron="0 0 * * *")

        assert config.incremental_only is True
        assert config.description == ""


class TestDefaultSchedules:
    """Test DEFAULT_SCHEDULES configuration."""

    def test_hourly_incremental_schedule(self):
        hourly = next(s for s in DEFAULT_SCHEDULES if s.schedule_id == "supplier-sync-hourly")
        assert hourly.cron == "0 * * * *"
        assert hourly.incremental_only is True

    def test_weekly_full_schedule(self):
        weekly = next(s for s in DEFAULT_SCHEDULES if s.schedule_id == "supplier-sync-weekly-full")
        assert weekly.cron == "0 2 * * 0"
        assert weekly.incremental_only is False

    def test_all_schedules_have_valid_cron(self):
        """Verify all schedules have valid cron expressions."""
        for schedule in DEFAULT_SCHEDULES:
            assert len(schedule.cron.split()) == 5, f"Invalid cron: {schedule.cron}"

    def test_schedule_ids_unique(self):
        ids = [s.schedule_id for s in DEFAULT_SCHEDULES]
        assert len(ids) == len(set(ids))


class TestScheduleOperations:
    """Test schedule management against a mocked Temporal client."""

    @pytest.mark.asyncio
    async def test_create_schedule(self):
        client = MagicMock()
        client.create_schedule = AsyncMock()

        sid = await create_schedule(client, DEFAULT_SCHEDULES[0], task_queue="sync-q")

        assert sid == "supplier-sync-hourly"
        schedule_id, schedule = client.create_schedule.await_args.args
        assert schedule_id == "supplier-sync-hourly"
        assert schedule.spec.cron_expressions == ["0 * * * *"]
        assert schedule.action.task_queue == "sync-q"
        assert schedule.action.workflow == "SupplierSyncWorkflow"

    @pytest.mark.asyncio
    async def test_existing_schedule_is_not_an_error(self):
        client = MagicMock()
        client.create_schedule = AsyncMock(side_effect=RuntimeError("Schedule already exists"))

        sid = await create_schedule(client, DEFAULT_SCHEDULES[1], task_queue="sync-q")
        assert sid == "supplier-sync-weekly-full"

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        client = MagicMock()
        client.create_schedule = AsyncMock(side_effect=RuntimeError("connection refused"))

        with pytest.raises(RuntimeError):
            await create_schedule(client, DEFAULT_SCHEDULES[0], task_queue="sync-q")

    @pytest.mark.asyncio
    async def test_create_default_schedules(self):
        client = MagicMock()
        client.create_schedule = AsyncMock()

        ids = await create_default_schedules(client)

        assert ids == [s.schedule_id for s in DEFAULT_SCHEDULES]

    @pytest.mark.asyncio
    async def test_delete_schedule(self):
        handle = MagicMock()
        handle.delete = AsyncMock()
        client = MagicMock()
        client.get_schedule_handle.return_value = handle

        assert await delete_schedule("supplier-sync-hourly", client=client) is True
        client.get_schedule_handle.assert_called_once_with("supplier-sync-hourly")
        handle.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_failure_returns_false(self):
        handle = MagicMock()
        handle.delete = AsyncMock(side_effect=RuntimeError("not found"))
        client = MagicMock()
        client.get_schedule_handle.return_value = handle

        assert await delete_schedule("missing", client=client) is False
