"""Shared test doubles for projectbrowser tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from projectbrowser.errors import ListingFetchError
from projectbrowser.navigation.types import DirectoryEntry, EntryKind


def file_entry(path: str, size: int = 10) -> DirectoryEntry:
    """Create a FILE entry whose name is the last segment of ``path``."""
    return DirectoryEntry(name=path.rsplit("/", 1)[-1], kind=EntryKind.FILE, path=path, size=size)


def dir_entry(path: str) -> DirectoryEntry:
    """Create a DIRECTORY entry whose name is the last segment of ``path``."""
    return DirectoryEntry(name=path.rsplit("/", 1)[-1], kind=EntryKind.DIRECTORY, path=path)


class FakeListingService:
    """In-memory listing service.

    ``tree`` maps a directory path to its entries, or to an exception to
    raise. ``gates`` holds events a listing waits on before answering, so
    tests can control the order in which overlapping fetches resolve.
    """

    def __init__(self, tree: dict[str, list[DirectoryEntry] | Exception]) -> None:
        self.tree = tree
        self.calls: list[tuple[str, str]] = []
        self.gates: dict[str, asyncio.Event] = {}

    async def list_directory(self, project_name: str, path: str) -> list[DirectoryEntry]:
        self.calls.append((project_name, path))
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        result = self.tree.get(path)
        if result is None:
            raise ListingFetchError(f"Path not found: {path}", status_code=404)
        if isinstance(result, Exception):
            raise result
        return list(result)


class ManualTimer:
    """Timer handle driven by ManualTimerService.fire()."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerService:
    """TimerService that only fires when the test asks it to."""

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def every(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.active]

    def fire(self, interval: float) -> None:
        """Run every active timer with the given interval once."""
        for timer in self.active_timers:
            if timer.interval == interval:
                timer.callback()


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
