"""Periodic scheduling of earnings-move runs."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from earnmove.agent.runner import run_once
from earnmove.core.logging import get_logger

if TYPE_CHECKING:
    from earnmove.config import Settings

logger = get_logger(__name__)

EARNINGS_JOB_ID = "earnings_batch"


def create_scheduler() -> AsyncIOScheduler:
    """Create a new scheduler instance."""
    return AsyncIOScheduler(timezone="UTC")


async def earnings_batch_job(settings: Settings) -> None:
    """Run one earnings batch. Failures are logged so later ticks still fire."""
    try:
        exit_code = await run_once(settings)
        if exit_code != 0:
            logger.error("Earnings batch job aborted", exit_code=exit_code)
    except Exception:
        logger.exception("Earnings batch job failed")


def schedule_earnings_job(scheduler: AsyncIOScheduler, settings: Settings) -> None:
    """Register the earnings batch on ``settings.schedule_cron`` (UTC)."""
    scheduler.add_job(
        earnings_batch_job,
        CronTrigger.from_crontab(settings.schedule_cron, timezone="UTC"),
        args=[settings],
        id=EARNINGS_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )


async def run_scheduled(settings: Settings, shutdown_event: asyncio.Event | None = None) -> None:
    """Start the scheduler and block until ``shutdown_event`` is set."""
    shutdown_event = shutdown_event or asyncio.Event()
    scheduler = create_scheduler()
    schedule_earnings_job(scheduler, settings)
    scheduler.start()
    logger.info("Scheduler started", cron=settings.schedule_cron)
    try:
        await shutdown_event.wait()
    finally:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
