"""Release update check against the GitHub releases API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from projectbrowser import __version__
from projectbrowser.logging import get_logger
from projectbrowser.status.timers import AsyncioTimerService

if TYPE_CHECKING:
    from projectbrowser.status.timers import TimerHandle, TimerService

log = get_logger("updates")

GITHUB_API = "https://api.github.com"
DEFAULT_CHECK_INTERVAL = 5 * 60.0


def _version_parts(version: str) -> list[int]:
    parts = []
    for piece in version.split(".")[:3]:
        digits = ""
        for char in piece:
            if not char.isdigit():
                break
            digits += char
        parts.append(int(digits) if digits else 0)
    return parts + [0] * (3 - len(parts))


def is_greater_version(latest: str, current: str) -> bool:
    """Compare major.minor.patch numerically; equal versions are not greater."""
    return _version_parts(latest) > _version_parts(current)


@dataclass(frozen=True)
class ReleaseInfo:
    """The latest published release."""

    version: str
    title: str
    body: str
    html_url: str
    published_at: str | None = None


@dataclass(frozen=True)
class UpdateStatus:
    update_available: bool
    current_version: str
    latest_version: str | None = None
    release: ReleaseInfo | None = None


async def fetch_latest_release(
    owner: str,
    repo: str,
    client: httpx.AsyncClient,
) -> ReleaseInfo | None:
    """Fetch the latest release, or None when the repository has none.

    Raises:
        httpx.HTTPError: On transport failures and unexpected status codes.
    """
    response = await client.get(f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest")
    if response.status_code == 404:
        return None
    response.raise_for_status()

    data: Any = response.json()
    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not tag:
        return None

    return ReleaseInfo(
        version=tag.removeprefix("v"),
        title=data.get("name") or tag,
        body=data.get("body") or "",
        html_url=data.get("html_url") or f"https://github.com/{owner}/{repo}/releases/latest",
        published_at=data.get("published_at"),
    )


class UpdateChecker:
    """Checks for a newer release now and then every few minutes.

    Any failure is logged and reported as "no update available".
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        *,
        current_version: str = __version__,
        client: httpx.AsyncClient | None = None,
        timers: TimerService | None = None,
        interval: float = DEFAULT_CHECK_INTERVAL,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.current_version = current_version
        self.interval = interval
        self._client = client
        self._timers = timers if timers is not None else AsyncioTimerService()
        self._timer: TimerHandle | None = None
        self._pending: set[asyncio.Task[UpdateStatus]] = set()
        self.status = UpdateStatus(update_available=False, current_version=current_version)

    async def check(self) -> UpdateStatus:
        """Run one check and store the result in ``status``."""
        try:
            if self._client is not None:
                release = await fetch_latest_release(self.owner, self.repo, self._client)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    release = await fetch_latest_release(self.owner, self.repo, client)
        except (httpx.HTTPError, ValueError) as e:
            log.warning("Version check failed: %s", e)
            release = None

        if release is None:
            self.status = UpdateStatus(
                update_available=False, current_version=self.current_version
            )
        else:
            self.status = UpdateStatus(
                update_available=is_greater_version(release.version, self.current_version),
                current_version=self.current_version,
                latest_version=release.version,
                release=release,
            )
        log.debug("Update status: %s", self.status)
        return self.status

    def _schedule_check(self) -> None:
        task = asyncio.get_running_loop().create_task(self.check())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def start(self) -> None:
        """Check immediately, then every ``interval`` seconds.

        Must be called from within a running event loop.
        """
        if self._timer is not None:
            return
        self._schedule_check()
        self._timer = self._timers.every(self.interval, self._schedule_check)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    async def __aenter__(self) -> UpdateChecker:
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        self.stop()
