"""Recurring background runner for the reminder checks.

Two independent loops share one event loop:

* the short cycle fires after a warm-up delay and then on a fixed interval
  anchored at startup;
* the daily cycle fires at every local midnight, plus one early run shortly
  after startup.

Each loop awaits its run before sleeping until the next fire time, so runs of
the same cycle never overlap. Fire times that passed while a run was still in
progress are skipped rather than stacked, and the anchor never moves. The first
fire time is never skipped, so a zero warm-up runs immediately.
"""

from __future__ import annotations

import asyncio
import heapq
import logging
from collections.abc import Awaitable, Callable, Iterator, Sequence
from datetime import datetime, timedelta
from itertools import count

from anyio import to_thread
from sqlalchemy.orm import Session

from teamboard.application.use_cases.notifications import (
    DAILY_CYCLE_CHECKS,
    SHORT_CYCLE_CHECKS,
)
from teamboard.config import Settings
from teamboard.utils import next_local_midnight, now_in_app_timezone

logger = logging.getLogger(__name__)

ReminderCheck = Callable[..., int]
CycleReport = dict[str, int | None]


def interval_schedule(
    started_at: datetime, *, warmup: timedelta, interval: timedelta
) -> Iterator[datetime]:
    """Yield the short-cycle fire times in chronological order."""

    ticks = (started_at + interval * step for step in count(1))
    return heapq.merge([started_at + warmup], ticks)


def daily_schedule(started_at: datetime, *, warmup: timedelta) -> Iterator[datetime]:
    """Yield the daily-cycle fire times in chronological order."""

    return heapq.merge([started_at + warmup], _local_midnights(started_at))


def _local_midnights(started_at: datetime) -> Iterator[datetime]:
    fire_at = next_local_midnight(started_at)
    while True:
        yield fire_at
        fire_at = next_local_midnight(fire_at)


class ReminderScheduler:
    """Own the timers that periodically run the reminder checks."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        interval: timedelta = timedelta(minutes=30),
        warmup: timedelta = timedelta(seconds=60),
        daily_warmup: timedelta = timedelta(seconds=120),
        short_checks: Sequence[ReminderCheck] = SHORT_CYCLE_CHECKS,
        daily_checks: Sequence[ReminderCheck] = DAILY_CYCLE_CHECKS,
        clock: Callable[[], datetime] = now_in_app_timezone,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("Reminder interval must be positive")
        self._session_factory = session_factory
        self._interval = interval
        self._warmup = warmup
        self._daily_warmup = daily_warmup
        self._short_checks = tuple(short_checks)
        self._daily_checks = tuple(daily_checks)
        self._clock = clock
        self._sleep = sleep
        self._tasks: list[asyncio.Task] = []

    @classmethod
    def from_settings(
        cls, settings: Settings, session_factory: Callable[[], Session]
    ) -> "ReminderScheduler":
        return cls(
            session_factory,
            interval=timedelta(minutes=settings.reminder_interval_minutes),
            warmup=timedelta(seconds=settings.reminder_warmup_seconds),
            daily_warmup=timedelta(seconds=settings.daily_reminder_warmup_seconds),
        )

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def start(self) -> None:
        """Start both cycles on the running event loop. Calling it twice is a no-op."""

        if self.running:
            logger.info("Reminder scheduler already running, skipping start")
            return

        started_at = self._clock()
        self._tasks = [
            asyncio.create_task(
                self._drive(
                    "short",
                    self.run_short_cycle,
                    interval_schedule(
                        started_at, warmup=self._warmup, interval=self._interval
                    ),
                ),
                name="reminders-short-cycle",
            ),
            asyncio.create_task(
                self._drive(
                    "daily",
                    self.run_daily_cycle,
                    daily_schedule(started_at, warmup=self._daily_warmup),
                ),
                name="reminders-daily-cycle",
            ),
        ]
        logger.info(
            "Reminder scheduler started: short cycle every %s, daily cycle at local midnight",
            self._interval,
        )

    async def stop(self) -> None:
        """Cancel both cycles and wait for them to finish."""

        tasks, self._tasks = self._tasks, []
        if not tasks:
            return
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Reminder scheduler stopped")

    async def run_short_cycle(self) -> CycleReport:
        return await self._run_checks("short", self._short_checks)

    async def run_daily_cycle(self) -> CycleReport:
        return await self._run_checks("daily", self._daily_checks)

    async def _run_checks(self, cycle: str, checks: Sequence[ReminderCheck]) -> CycleReport:
        logger.info("Running %s reminder cycle", cycle)
        report: CycleReport = {}
        for check in checks:
            report[_check_name(check)] = await to_thread.run_sync(self._run_check, check)
        return report

    def _run_check(self, check: ReminderCheck) -> int | None:
        """Run ``check`` with its own session; failures are logged, never raised."""

        session = None
        try:
            session = self._session_factory()
            return check(session, now=self._clock())
        except Exception:
            logger.exception("Reminder check %s failed", _check_name(check))
            return None
        finally:
            if session is not None:
                session.close()

    async def _drive(
        self,
        cycle: str,
        run: Callable[[], Awaitable[CycleReport]],
        schedule: Iterator[datetime],
    ) -> None:
        has_run = False
        for fire_at in schedule:
            delay = (fire_at - self._clock()).total_seconds()
            if delay < 0 and has_run:
                logger.warning(
                    "Skipping %s reminder cycle due at %s, the previous run overran",
                    cycle,
                    fire_at.isoformat(),
                )
                continue
            await self._sleep(max(delay, 0))
            has_run = True
            try:
                await run()
            except Exception:
                logger.exception("The %s reminder cycle failed", cycle)


def _check_name(check: ReminderCheck) -> str:
    return getattr(check, "__name__", repr(check))


__all__ = [
    "ReminderScheduler",
    "daily_schedule",
    "interval_schedule",
]
