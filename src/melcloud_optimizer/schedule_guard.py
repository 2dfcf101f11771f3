"""Start and run the recurring optimization jobs.

Two jobs exist for the lifetime of a guard: an hourly optimization and a
weekly calibration. They are created stopped and are only started once both
the MELCloud account and the device to optimize have been configured.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from melcloud_optimizer.const import (
    DEFAULT_TIMEZONE,
    HOURLY_CRON,
    SETTING_DEVICE_ID,
    SETTING_USER,
    WEEKLY_CRON,
)
from melcloud_optimizer.models import OptimizationResult


if TYPE_CHECKING:
    from melcloud_optimizer.scheduler import JobHandle, Scheduler
    from melcloud_optimizer.settings import SettingsReader

_LOGGER = logging.getLogger(__name__)

OptimizationCallable = Callable[[], Awaitable[OptimizationResult | Mapping[str, Any] | None]]

HOURLY_JOB = "hourly"
WEEKLY_JOB = "weekly"


class ScheduleGuard:
    """Own the hourly and weekly optimization jobs.

    Each job is either stopped or running. :meth:`ensure_running_if_ready`
    starts stopped jobs when the settings allow it, and :meth:`shutdown` stops
    them. A settings change alone never stops a job.

    A tick that fires while the previous tick of the same job is still running
    is skipped. A failing tick is logged and the job keeps its schedule.

    Example:
        ```python
        guard = ScheduleGuard(
            settings=settings,
            scheduler=APSchedulerBackend(),
            run_hourly=optimizer.run_hourly,
            run_weekly=optimizer.run_weekly,
        )
        guard.ensure_running_if_ready()
        ...
        guard.shutdown()
        ```
    """

    def __init__(
        self,
        settings: SettingsReader,
        scheduler: Scheduler,
        run_hourly: OptimizationCallable,
        run_weekly: OptimizationCallable,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        hourly_cron: str = HOURLY_CRON,
        weekly_cron: str = WEEKLY_CRON,
    ) -> None:
        """Initialize the guard and create both jobs, stopped.

        Args:
            settings: Settings to read the account and device identifiers from.
            scheduler: Scheduler used to create the recurring jobs.
            run_hourly: Hourly optimization routine.
            run_weekly: Weekly calibration routine.
            timezone: Timezone the cron expressions are evaluated in.
            hourly_cron: Schedule of the hourly job.
            weekly_cron: Schedule of the weekly job.
        """
        self._settings = settings
        self._run_hourly = run_hourly
        self._run_weekly = run_weekly
        self._busy: set[str] = set()

        self._hourly_job: JobHandle = scheduler.schedule(
            hourly_cron, timezone, self._hourly_tick, name="hourly-optimization"
        )
        self._weekly_job: JobHandle = scheduler.schedule(
            weekly_cron, timezone, self._weekly_tick, name="weekly-calibration"
        )

    @property
    def hourly_running(self) -> bool:
        """Check if the hourly job is running."""
        return self._hourly_job.is_running()

    @property
    def weekly_running(self) -> bool:
        """Check if the weekly job is running."""
        return self._weekly_job.is_running()

    def is_ready(self) -> bool:
        """Check if both the account and the device identifiers are configured."""
        return bool(self._settings.get(SETTING_USER)) and bool(self._settings.get(SETTING_DEVICE_ID))

    def ensure_running_if_ready(self) -> bool:
        """Start any stopped job if the required settings are present.

        Jobs that already run are left alone, so this can be called any
        number of times.

        Returns:
            True if the jobs are running after the call.
        """
        if not self.is_ready():
            _LOGGER.warning(
                "Optimization jobs not started - missing required settings (%s or %s)",
                SETTING_USER,
                SETTING_DEVICE_ID,
            )
            return False

        if not self._hourly_job.is_running():
            self._hourly_job.start()
            _LOGGER.info("Hourly optimization job started")

        if not self._weekly_job.is_running():
            self._weekly_job.start()
            _LOGGER.info("Weekly calibration job started")

        return True

    def shutdown(self) -> None:
        """Stop both jobs. Ticks already in progress run to completion."""
        _LOGGER.info("Stopping optimization jobs")
        for name, job in ((HOURLY_JOB, self._hourly_job), (WEEKLY_JOB, self._weekly_job)):
            try:
                job.stop()
            except Exception:
                _LOGGER.exception("Error stopping %s job", name)
            else:
                _LOGGER.debug("%s job stopped", name.capitalize())

    async def _hourly_tick(self) -> None:
        """Run one hourly optimization."""
        _LOGGER.info("Hourly optimization triggered")
        result = await self._run_tick(HOURLY_JOB, self._run_hourly)
        if result is not None and result.success and result.data:
            _LOGGER.info(
                "Target temp: %s°C, Savings: %s",
                result.data.get("targetTemp"),
                result.data.get("savings") or "N/A",
            )

    async def _weekly_tick(self) -> None:
        """Run one weekly calibration."""
        _LOGGER.info("Weekly calibration triggered")
        result = await self._run_tick(WEEKLY_JOB, self._run_weekly)
        if result is not None and result.success and result.data and result.data.get("method"):
            _LOGGER.info("Calibration method: %s", result.data["method"])

    async def _run_tick(self, job_name: str, runner: OptimizationCallable) -> OptimizationResult | None:
        """Run a job's routine unless the previous tick is still busy.

        Returns:
            The routine's result, or None if the tick was skipped or failed.
        """
        if job_name in self._busy:
            _LOGGER.warning("Previous %s run still in progress, skipping this tick", job_name)
            return None

        self._busy.add(job_name)
        try:
            _LOGGER.info("Starting %s run", job_name)
            result = OptimizationResult.from_value(await runner())
        except Exception:
            _LOGGER.exception("Error during %s run", job_name)
            return None
        finally:
            self._busy.discard(job_name)

        if result.success:
            _LOGGER.info("%s run completed successfully", job_name.capitalize())
        else:
            _LOGGER.error("%s run failed: %s", job_name.capitalize(), result.message)
        return result
