"""
Tick Driver
===========

Periodic scheduler for the simulation step, pumped by the host loop.

The driver never reads a clock itself. Hosts call update(now_ms) from
their frame loop (pygame clock, test harness) and the driver fires the
step callback whenever the current deadline has passed.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DriverState(Enum):
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"


class TickDriver:
    """
    STOPPED/RUNNING state machine with a variable interval.

    After every step the interval is re-read from interval_fn. When it
    changed, the pending deadline is cancelled and a new one is scheduled
    one new interval after the step that caused the change. stop() is
    synchronous and idempotent: once it returns, update() fires nothing
    until start() is called again.
    """

    def __init__(
        self,
        step_fn: Callable[[], None],
        interval_fn: Callable[[], int]
    ):
        """
        Initialize driver.

        Args:
            step_fn: Runs one simulation step. May call stop().
            interval_fn: Current tick interval in milliseconds.
        """
        self._step_fn = step_fn
        self._interval_fn = interval_fn
        self._state = DriverState.STOPPED
        self._interval_ms: int = 0
        self._next_due_ms: Optional[int] = None
        self._reschedules: int = 0

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is DriverState.RUNNING

    @property
    def interval_ms(self) -> int:
        """Interval of the current schedule (0 before the first start)."""
        return self._interval_ms

    @property
    def next_due_ms(self) -> Optional[int]:
        """Time of the next step, or None while stopped."""
        return self._next_due_ms

    @property
    def reschedule_count(self) -> int:
        """Number of interval changes since construction."""
        return self._reschedules

    def _read_interval(self) -> int:
        interval = int(self._interval_fn())
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        return interval

    def start(self, now_ms: int) -> None:
        """Begin periodic stepping; the first step is due one interval from now."""
        self._interval_ms = self._read_interval()
        self._next_due_ms = now_ms + self._interval_ms
        if self._state is not DriverState.RUNNING:
            logger.debug("Tick driver started at %d ms (interval %d ms)", now_ms, self._interval_ms)
        self._state = DriverState.RUNNING

    def stop(self) -> None:
        """Cancel periodic stepping. No-op when already stopped."""
        if self._state is DriverState.STOPPED:
            return
        self._state = DriverState.STOPPED
        self._next_due_ms = None
        logger.debug("Tick driver stopped")

    def reschedule(self, from_ms: int) -> None:
        """Cancel the pending deadline and schedule one interval after from_ms."""
        if self._state is not DriverState.RUNNING:
            return
        interval = self._read_interval()
        if interval != self._interval_ms:
            logger.debug("Tick interval %d ms -> %d ms", self._interval_ms, interval)
            self._reschedules += 1
        self._interval_ms = interval
        self._next_due_ms = from_ms + interval

    def update(self, now_ms: int) -> int:
        """
        Fire the step if its deadline has passed.

        At most one step fires per call. A host that fell more than one
        interval behind resynchronizes to now instead of bursting.

        Args:
            now_ms: Current host time in milliseconds.

        Returns:
            Number of steps fired (0 or 1).
        """
        if self._state is not DriverState.RUNNING or self._next_due_ms is None:
            return 0
        if now_ms < self._next_due_ms:
            return 0

        fired_at = self._next_due_ms
        self._step_fn()

        # The step may have ended the game and stopped us
        if self._state is not DriverState.RUNNING:
            return 1

        interval = self._read_interval()
        if interval != self._interval_ms:
            self.reschedule(fired_at)
        else:
            self._next_due_ms = fired_at + interval

        if self._next_due_ms <= now_ms:
            self._next_due_ms = now_ms + self._interval_ms
        return 1
