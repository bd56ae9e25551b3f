"""Deferred execution for debounced reflows."""

from __future__ import annotations

import asyncio
from typing import Callable

from ..host import Scheduler, TimerHandle


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop's ``call_later``.

    Args:
        loop: Loop to schedule on; defaults to the running loop at call time,
            or a private loop when none is running.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Return the loop timers are scheduled on.

        An explicit loop wins, then the running loop. Outside any running
        loop a private loop is created once; a synchronous host drives it
        with ``run_until_complete``.
        """

        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            self._loop = asyncio.new_event_loop()
            return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return self.loop.call_later(delay, callback)


class Debouncer:
    """Runs a callback once activity has been quiet for ``delay`` seconds.

    Every ``trigger`` cancels the pending call and schedules a new one.

    Args:
        scheduler: Timer source.
        delay: Quiet period in seconds.
        callback: Work to run when the timer fires.
    """

    def __init__(
        self, *, scheduler: Scheduler, delay: float, callback: Callable[[], None]
    ) -> None:
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """Return True while a call is scheduled."""

        return self._handle is not None

    def trigger(self) -> None:
        """Restart the quiet period."""

        self.cancel()
        self._handle = self.scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self.callback()
