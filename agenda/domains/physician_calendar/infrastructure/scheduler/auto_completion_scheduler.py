# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Physician Calendar)
# Description: Periodic host for the auto-completion sweep.
# ============================================================================
"""Auto-Completion Scheduler.

APScheduler-based async scheduler that runs the auto-completion sweep on a
fixed interval and, after a sweep that completed something, schedules a
single delayed refresh of the agenda.
"""

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-not-found]
from apscheduler.triggers.date import DateTrigger  # type: ignore[import-not-found]
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore[import-not-found]

if TYPE_CHECKING:
    from ...application.services.auto_completion import AutoCompletionSweep, SweepReport
    from ...application.use_cases.refresh_appointments import RefreshAppointmentsUseCase

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "auto_completion_sweep"
REFRESH_JOB_ID = "auto_completion_refresh"


class AutoCompletionScheduler:
    """Scheduler del auto-completado de turnos.

    Runs the sweep every ``interval_seconds`` and keeps at most one delayed
    refresh pending.
    """

    def __init__(
        self,
        sweep: "AutoCompletionSweep",
        refresh: "RefreshAppointmentsUseCase",
        interval_seconds: int = 60,
        refresh_delay_seconds: float = 1.0,
        enabled: bool = True,
    ):
        """Initialize scheduler.

        Args:
            sweep: Auto-completion sweep to run.
            refresh: Use case that re-fetches the agenda.
            interval_seconds: Seconds between sweeps.
            refresh_delay_seconds: Delay before the post-sweep refresh.
            enabled: Whether scheduler is enabled.
        """
        self._sweep = sweep
        self._refresh = refresh
        self.interval_seconds = interval_seconds
        self.refresh_delay_seconds = refresh_delay_seconds
        self.enabled = enabled

        self._scheduler: AsyncIOScheduler | None = None
        self._is_running = False

    async def start(self) -> None:
        """Start the scheduler."""
        if not self.enabled:
            logger.info("AutoCompletionScheduler is disabled, skipping start")
            return

        if self._is_running:
            logger.warning("AutoCompletionScheduler already running")
            return

        scheduler = AsyncIOScheduler()
        self._scheduler = scheduler

        scheduler.add_job(
            self._run_sweep,
            IntervalTrigger(seconds=self.interval_seconds),
            id=SWEEP_JOB_ID,
            replace_existing=True,
            name="Appointment Auto-Completion",
            max_instances=1,
            coalesce=True,
        )

        scheduler.start()
        self._is_running = True
        logger.info(f"AutoCompletionScheduler started (interval={self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the scheduler gracefully."""
        if self._scheduler and self._is_running:
            self._scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("AutoCompletionScheduler stopped")

    async def _run_sweep(self) -> None:
        try:
            report = await self._sweep.run_once()
        except Exception as e:
            logger.error(f"Error running auto-completion sweep: {e}", exc_info=True)
            return
        self._after_sweep(report)

    def _after_sweep(self, report: "SweepReport") -> None:
        if report.refresh_needed:
            self.schedule_refresh()

    def schedule_refresh(self) -> None:
        """Schedule the delayed refresh, replacing one that is still pending."""
        if not self._scheduler or not self._is_running:
            logger.debug("Scheduler not running, refresh not scheduled")
            return
        run_at = datetime.now(self._scheduler.timezone) + timedelta(seconds=self.refresh_delay_seconds)
        self._scheduler.add_job(
            self._run_refresh,
            DateTrigger(run_date=run_at),
            id=REFRESH_JOB_ID,
            replace_existing=True,
            name="Agenda Refresh After Auto-Completion",
        )

    async def _run_refresh(self) -> None:
        result = await self._refresh.execute()
        if not result.success:
            logger.warning(f"Refresh after auto-completion failed: {result.error_message}")

    async def trigger_manual_sweep(self) -> "SweepReport":
        """Run one sweep now (for admin/testing) and refresh if needed.

        Returns:
            The sweep report.
        """
        report = await self._sweep.run_once()
        if report.refresh_needed:
            if self._is_running:
                self.schedule_refresh()
            else:
                await self._run_refresh()
        return report

    @property
    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self._is_running

    def get_jobs_info(self) -> list[dict[str, Any]]:
        """Get information about scheduled jobs."""
        if not self._scheduler:
            return []

        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append(
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": next_run.isoformat() if next_run else None,
                }
            )
        return jobs

