"""Recurring job primitives.

``ScheduleGuard`` only talks to the small :class:`Scheduler` interface below,
so tests can drive ticks by hand. :class:`APSchedulerBackend` is the real
implementation on top of APScheduler's asyncio scheduler.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Protocol

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger


_LOGGER = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class JobHandle(Protocol):
    """A recurring job that can be started and stopped any number of times."""

    def start(self) -> None:
        """Start firing on the job's schedule."""

    def stop(self) -> None:
        """Stop firing. A tick that is already running is not interrupted."""

    def is_running(self) -> bool:
        """Check if the job is scheduled to fire."""


class Scheduler(Protocol):
    """Factory for recurring jobs."""

    def schedule(
        self,
        cron_expression: str,
        timezone: str,
        callback: TickCallback,
        *,
        name: str | None = None,
    ) -> JobHandle:
        """Create a stopped job firing ``callback`` on a crontab schedule."""


class APSchedulerJob:
    """JobHandle for a job registered with :class:`APSchedulerBackend`."""

    def __init__(self, backend: APSchedulerBackend, job_id: str) -> None:
        self._backend = backend
        self.job_id = job_id

    def start(self) -> None:
        """Resume the job, starting the scheduler if needed."""
        self._backend.ensure_started()
        self._backend.scheduler.resume_job(self.job_id)

    def stop(self) -> None:
        """Pause the job."""
        self._backend.scheduler.pause_job(self.job_id)

    def is_running(self) -> bool:
        """Check if the scheduler is live and the job has a next run time."""
        if not self._backend.started:
            return False
        job = self._backend.scheduler.get_job(self.job_id)
        return job is not None and job.next_run_time is not None


class APSchedulerBackend:
    """Scheduler built on APScheduler's AsyncIOScheduler.

    Jobs are added paused. A job never runs two ticks at once
    (``max_instances=1``) and missed ticks are coalesced into one.

    APScheduler 3.11 defers ``AsyncIOScheduler.shutdown`` to the event loop,
    so the backend tracks whether it was started itself instead of trusting
    ``scheduler.running``.

    Example:
        ```python
        backend = APSchedulerBackend()
        job = backend.schedule("0 * * * *", "Europe/Oslo", tick)
        job.start()
        ...
        backend.shutdown()
        ```
    """

    def __init__(self, scheduler: AsyncIOScheduler | None = None) -> None:
        """Initialize the backend.

        Args:
            scheduler: Optional pre-configured AsyncIOScheduler.
        """
        self.scheduler = scheduler or AsyncIOScheduler()
        self._started = False
        self._start_pending = False

    @property
    def started(self) -> bool:
        """Check if the backend is started and not shut down."""
        return self._started

    def schedule(
        self,
        cron_expression: str,
        timezone: str,
        callback: TickCallback,
        *,
        name: str | None = None,
    ) -> APSchedulerJob:
        """Register a paused cron job.

        Args:
            cron_expression: Five-field crontab expression.
            timezone: IANA timezone name the expression is evaluated in.
            callback: Coroutine function called on every tick.
            name: Optional job name for logging.

        Returns:
            Handle for the paused job.
        """
        job_id = uuid.uuid4().hex
        trigger = CronTrigger.from_crontab(cron_expression, timezone=timezone)
        self.scheduler.add_job(
            callback,
            trigger,
            id=job_id,
            name=name or cron_expression,
            next_run_time=None,
            max_instances=1,
            coalesce=True,
        )
        _LOGGER.debug("Scheduled job %s (%s, %s)", name or job_id, cron_expression, timezone)
        return APSchedulerJob(self, job_id)

    def ensure_started(self) -> None:
        """Start the underlying scheduler. Needs a running event loop.

        If a shutdown is still queued on the event loop, the start is queued
        behind it.
        """
        if self._started:
            return
        self._started = True
        if not self.scheduler.running:
            self.scheduler.start()
        elif not self._start_pending:
            self._start_pending = True
            asyncio.get_running_loop().call_soon(self._start_after_shutdown)

    def _start_after_shutdown(self) -> None:
        self._start_pending = False
        if self._started and not self.scheduler.running:
            self.scheduler.start()

    def shutdown(self) -> None:
        """Stop the underlying scheduler without waiting for running ticks.

        Calling it again, or on a backend that never started, does nothing.
        """
        if not self._started:
            return
        self._started = False
        if self._start_pending:
            # The earlier shutdown is still queued and the start behind it
            # will see the backend stopped.
            return
        self.scheduler.shutdown(wait=False)
        _LOGGER.debug("Scheduler shut down")
