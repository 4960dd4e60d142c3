"""Cron-driven polling of the event log.

The scheduler runs one ProcessingCycle per cron tick inside a single
background task, so ticks never overlap. While waiting for the next tick
it logs the previous and next run times every report interval. Stopping
interrupts the wait but lets a cycle already in progress finish.

Example:
    >>> scheduler = PollingScheduler(cycle, "*/1 * * * *", SystemTimeAuthority())
    >>> await scheduler.start()
    >>> # ... process runs ...
    >>> await scheduler.stop()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING, Optional

import structlog
from croniter import croniter

if TYPE_CHECKING:
    from governance_processor.application.ports.time_authority import (
        TimeAuthorityProtocol,
    )
    from governance_processor.workers.processing_cycle import (
        CycleResult,
        ProcessingCycle,
    )

DEFAULT_REPORT_INTERVAL_SECONDS = 5

Sleeper = Callable[[float], Awaitable[None]]


class PollingScheduler:
    """Background polling driver.

    Attributes:
        running: Whether the loop task is active.
        cron_expression: The schedule.
        last_run: When the last cycle started, None before the first.
    """

    def __init__(
        self,
        cycle: "ProcessingCycle",
        cron_expression: str,
        time_authority: "TimeAuthorityProtocol",
        sleep: Sleeper = asyncio.sleep,
        report_interval_seconds: float = DEFAULT_REPORT_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            cycle: The cycle to run on each tick.
            cron_expression: Cron schedule for ticks.
            time_authority: Source of the current time.
            sleep: Awaitable sleeper, replaceable in tests.
            report_interval_seconds: Spacing of the waiting log line.

        Raises:
            ValueError: If cron_expression is not a valid cron schedule.
        """
        if not croniter.is_valid(cron_expression):
            raise ValueError(f"Invalid cron expression: {cron_expression!r}")
        if report_interval_seconds <= 0:
            raise ValueError("report_interval_seconds must be positive")
        self._cycle = cycle
        self._cron = cron_expression
        self._time = time_authority
        self._sleep = sleep
        self._report_interval = report_interval_seconds
        self._running: bool = False
        self._in_cycle: bool = False
        self._task: Optional[asyncio.Task[None]] = None
        self._last_run: Optional[datetime] = None
        self._log = structlog.get_logger().bind(service="polling_scheduler")

    @property
    def running(self) -> bool:
        return self._running

    @property
    def cron_expression(self) -> str:
        return self._cron

    @property
    def last_run(self) -> Optional[datetime]:
        return self._last_run

    def next_run(self, after: datetime | None = None) -> datetime:
        """Next tick strictly after the given time (default: now)."""
        base = after if after is not None else self._time.now()
        return croniter(self._cron, base).get_next(datetime)

    async def start(self) -> None:
        """Start the polling loop.

        Note:
            Calling start multiple times is safe (idempotent).
        """
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        self._log.info("polling_scheduler_started", cron=self._cron)

    async def stop(self) -> None:
        """Stop the polling loop and wait for its task to finish.

        A cycle in progress runs to completion; only the wait between
        ticks is cancelled.

        Note:
            Calling stop when not running is safe.
        """
        self._running = False
        if self._task:
            if self._in_cycle:
                self._log.info("polling_scheduler_draining")
            else:
                self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._log.info("polling_scheduler_stopped")

    async def _wait_for(self, next_run: datetime) -> None:
        while self._running:
            remaining = (next_run - self._time.now()).total_seconds()
            if remaining <= 0:
                return
            await self._sleep(min(remaining, self._report_interval))
            self._log.info(
                "polling_scheduler_waiting",
                previous_run=self._last_run.isoformat() if self._last_run else None,
                next_run=next_run.isoformat(),
            )

    async def _run_loop(self) -> None:
        """Wait for each tick and run one cycle.

        A failed cycle is logged and the loop continues with the next tick;
        the cycle itself has already reported the error.
        """
        while self._running:
            next_run = self.next_run()
            await self._wait_for(next_run)
            if not self._running:
                return
            self._in_cycle = True
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._log.error("polling_cycle_failed", error=str(e))
            finally:
                self._in_cycle = False

    async def run_once(self) -> "CycleResult":
        """Run a single cycle now.

        Note:
            This method is primarily for testing purposes.
            In production, use start() and stop() instead.
        """
        self._last_run = self._time.now()
        return await self._cycle.run()
