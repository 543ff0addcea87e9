"""Repeating timers on the asyncio event loop.

Each timer is a task that sleeps for its interval and then runs the
callback, like the polling loops elsewhere in the package. Handles are
cancelled explicitly by their owner; nothing relies on garbage collection.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

from projectbrowser.logging import get_logger

log = get_logger("timers")


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class TimerService(Protocol):
    """Schedules repeating callbacks."""

    def every(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioTimer:
    """Handle for one repeating callback."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self._task: asyncio.Task[None] | None = asyncio.get_running_loop().create_task(
            self._run()
        )

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self._callback()
            except Exception as e:
                log.error("Timer callback error: %s", e)

    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        if self._task is not None:
            self._task.cancel()
            self._task = None


class AsyncioTimerService:
    """TimerService running on the current event loop.

    ``every()`` must be called from within a running loop.
    """

    def every(self, interval: float, callback: Callable[[], None]) -> AsyncioTimer:
        return AsyncioTimer(interval, callback)
