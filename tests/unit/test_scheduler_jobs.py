"""Tests for scheduled earnings runs (agent/scheduler.py)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from apscheduler.triggers.cron import CronTrigger

from earnmove.agent.scheduler import (
    EARNINGS_JOB_ID,
    create_scheduler,
    earnings_batch_job,
    run_scheduled,
    schedule_earnings_job,
)
from earnmove.config import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(  # type: ignore[call-arg]
        _env_file=None, eodhd_api_key="k", schedule_cron="0 6 * * 1-5"
    )


class TestCreateScheduler:
    """Tests for create_scheduler."""

    def test_creates_scheduler(self) -> None:
        scheduler = create_scheduler()
        assert scheduler is not None
        assert str(scheduler.timezone) == "UTC"


class TestScheduleEarningsJob:
    def test_registers_single_job(self, settings: Settings) -> None:
        scheduler = create_scheduler()

        schedule_earnings_job(scheduler, settings)

        jobs = scheduler.get_jobs()
        assert len(jobs) == 1
        job = jobs[0]
        assert job.id == EARNINGS_JOB_ID
        assert isinstance(job.trigger, CronTrigger)
        assert job.max_instances == 1
        assert job.coalesce is True
        assert tuple(job.args) == (settings,)

    def test_invalid_cron_raises(self, settings: Settings) -> None:
        scheduler = create_scheduler()
        bad = settings.model_copy(update={"schedule_cron": "every morning"})

        with pytest.raises(ValueError):
            schedule_earnings_job(scheduler, bad)


class TestEarningsBatchJob:
    """Tests for earnings_batch_job."""

    async def test_runs_batch(self, settings: Settings) -> None:
        with patch(
            "earnmove.agent.scheduler.run_once", new_callable=AsyncMock, return_value=0
        ) as mock_run:
            await earnings_batch_job(settings)

        mock_run.assert_awaited_once_with(settings)

    async def test_aborted_run_does_not_raise(self, settings: Settings) -> None:
        with patch("earnmove.agent.scheduler.run_once", new_callable=AsyncMock, return_value=1):
            # Should not raise
            await earnings_batch_job(settings)

    async def test_unexpected_error_does_not_raise(self, settings: Settings) -> None:
        with patch(
            "earnmove.agent.scheduler.run_once",
            new_callable=AsyncMock,
            side_effect=RuntimeError("boom"),
        ):
            # Should not raise
            await earnings_batch_job(settings)


class TestRunScheduled:
    async def test_starts_and_stops_scheduler(self, settings: Settings) -> None:
        mock_scheduler = MagicMock()
        shutdown_event = asyncio.Event()
        shutdown_event.set()

        with patch(
            "earnmove.agent.scheduler.create_scheduler", return_value=mock_scheduler
        ):
            await run_scheduled(settings, shutdown_event)

        mock_scheduler.add_job.assert_called_once()
        mock_scheduler.start.assert_called_once()
        mock_scheduler.shutdown.assert_called_once_with(wait=False)

    async def test_waits_for_shutdown(self, settings: Settings) -> None:
        mock_scheduler = MagicMock()
        shutdown_event = asyncio.Event()

        with patch(
            "earnmove.agent.scheduler.create_scheduler", return_value=mock_scheduler
        ):
            task = asyncio.create_task(run_scheduled(settings, shutdown_event))
            await asyncio.sleep(0)
            assert not task.done()
            mock_scheduler.shutdown.assert_not_called()

            shutdown_event.set()
            await task

        mock_scheduler.shutdown.assert_called_once_with(wait=False)
