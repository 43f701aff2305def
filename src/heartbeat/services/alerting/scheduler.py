"""
Sweep Scheduler

Runs the emergency sweep once a day on the application event loop.
"""

import asyncio
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from heartbeat.config.logging_config import get_logger
from heartbeat.services.alerting.sweep import EmergencySweep

logger = get_logger(__name__)

SWEEP_JOB_ID = "emergency-sweep"


class SweepScheduler:
    """
    Daily cron trigger for EmergencySweep.

    The job is registered with max_instances=1 and coalesce=True, so
    missed or overlapping fires collapse into a single run. The sweep's
    own lock still drops any manual trigger that races the scheduled one.

    Usage:
        scheduler = SweepScheduler(sweep, hour=10, minute=0, timezone="UTC")
        scheduler.start()
        ...
        await scheduler.shutdown()
    """

    def __init__(
        self,
        sweep: EmergencySweep,
        hour: int = 10,
        minute: int = 0,
        timezone: str = "UTC",
    ) -> None:
        self._sweep = sweep
        self._started = False
        self._trigger = CronTrigger(hour=hour, minute=minute, timezone=timezone)
        self._scheduler = AsyncIOScheduler(timezone=timezone)
        self._scheduler.add_job(
            self._run,
            trigger=self._trigger,
            id=SWEEP_JOB_ID,
            name="Daily emergency sweep",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )

    async def _run(self) -> None:
        await self._sweep.run_once()

    @property
    def running(self) -> bool:
        return self._started and self._scheduler.running

    @property
    def next_run_time(self) -> Optional[datetime]:
        job = self._scheduler.get_job(SWEEP_JOB_ID)
        return getattr(job, "next_run_time", None) if job else None

    def start(self) -> None:
        """Start the scheduler. Must be called with an event loop running."""
        if self._started:
            return
        self._scheduler.start()
        self._started = True
        logger.info(
            "Sweep scheduler started",
            trigger=str(self._trigger),
            next_run_time=str(self.next_run_time),
        )

    async def shutdown(self) -> None:
        """
        Stop the scheduler.

        AsyncIOScheduler stops on its next loop iteration, so yield once
        before returning.
        """
        if not self._started:
            return
        self._started = False
        self._scheduler.shutdown(wait=False)
        await asyncio.sleep(0)
        logger.info("Sweep scheduler stopped")
