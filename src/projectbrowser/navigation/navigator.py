"""Directory navigation engine.

The Navigator owns the current location inside one project, fetches
listings through an injected :class:`ListingService`, mixes in the synthetic
parent link, derives breadcrumbs and applies the client-side name filter.

Commands (``select_project``, ``load_directory``, ``enter``,
``jump_to_breadcrumb``, ``set_search_query``) are the only mutation entry
points. ``current_path`` is updated before a fetch is awaited, so
breadcrumbs always reflect the intended location while ``entries`` may lag
until the fetch resolves.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING

from projectbrowser.errors import ListingFetchError
from projectbrowser.logging import get_logger
from projectbrowser.navigation.paths import (
    build_breadcrumbs,
    join_path,
    normalize_path,
    parent_of,
)
from projectbrowser.navigation.types import (
    DEFAULT_ERROR_MESSAGE,
    Breadcrumb,
    DirectoryEntry,
    EntryKind,
    NavigationView,
    OpenFileRequest,
    Project,
    ViewMode,
)
from projectbrowser.preferences import VIEW_MODE_KEY

if TYPE_CHECKING:
    from projectbrowser.listing.service import FileOpener, ListingService
    from projectbrowser.preferences import PreferenceStore

log = get_logger("navigation")

NavigationListener = Callable[[NavigationView], None]


def load_view_mode(store: PreferenceStore, default: ViewMode = ViewMode.DETAILED) -> ViewMode:
    """Read the persisted view mode, ignoring absent or unknown values."""
    return ViewMode.parse(store.get(VIEW_MODE_KEY)) or default


def filter_entries(entries: list[DirectoryEntry], query: str) -> list[DirectoryEntry]:
    """Keep entries whose name contains ``query``, ignoring case.

    Synthetic entries (parent link, error placeholder) always survive. A
    blank query keeps everything; otherwise the query is matched as typed,
    surrounding whitespace included.
    """
    if not query.strip():
        return list(entries)
    needle = query.lower()
    return [
        entry
        for entry in entries
        if entry.kind.is_synthetic or needle in entry.name.lower()
    ]


class Navigator:
    """Single-level browser over one remote project at a time."""

    def __init__(
        self,
        listing: ListingService,
        *,
        opener: FileOpener | None = None,
        preferences: PreferenceStore | None = None,
        default_view_mode: ViewMode = ViewMode.DETAILED,
    ) -> None:
        self._listing = listing
        self._opener = opener
        self._preferences = preferences

        self.project: Project | None = None
        self.current_path = ""
        self.entries: list[DirectoryEntry] = []
        self.search_query = ""
        self.loading = False
        self.view_mode = (
            load_view_mode(preferences, default_view_mode)
            if preferences is not None
            else default_view_mode
        )

        # Newest issued fetch; older responses are dropped
        self._request_seq = 0
        self._listeners: list[NavigationListener] = []

    @property
    def project_root(self) -> str:
        return self.project.path if self.project else ""

    @property
    def filtered_entries(self) -> list[DirectoryEntry]:
        return filter_entries(self.entries, self.search_query)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def select_project(self, project: Project) -> None:
        """Make ``project`` active and load its root directory."""
        log.info("Selected project %s (%s)", project.name, project.path)
        self.project = project
        self.current_path = ""
        self.entries = []
        self.search_query = ""
        await self.load_directory("")

    async def load_directory(self, path: str) -> bool:
        """Fetch and store the listing of ``path``.

        Failures are stored as a single error entry. Returns False when the
        response was dropped because a newer fetch was issued meanwhile.
        """
        if self.project is None:
            raise RuntimeError("load_directory() called before select_project()")

        path = normalize_path(path)
        project = self.project
        self._request_seq += 1
        token = self._request_seq

        self.loading = True
        self._notify()
        log.debug("Fetching %s:%r (request %d)", project.name, path, token)

        try:
            listed = await self._listing.list_directory(project.name, path)
        except ListingFetchError as e:
            log.warning("Listing %s:%r failed: %s", project.name, path, e.message)
            entries = [DirectoryEntry.error(e.message)]
        except Exception as e:
            log.error("Unexpected error listing %s:%r: %s", project.name, path, e)
            entries = [DirectoryEntry.error(str(e) or DEFAULT_ERROR_MESSAGE)]
        else:
            entries = list(listed)
            if path:
                entries.insert(0, DirectoryEntry.parent_link(parent_of(path)))

        if token != self._request_seq:
            log.debug("Dropping stale listing for %r (request %d)", path, token)
            return False

        self.entries = entries
        self.loading = False
        self._notify()
        return True

    async def refresh(self) -> bool:
        """Reload the current directory."""
        return await self.load_directory(self.current_path)

    async def enter(self, entry: DirectoryEntry) -> None:
        """Activate an entry: navigate into directories, open files."""
        if entry.kind is EntryKind.PARENT_LINK:
            self.current_path = normalize_path(entry.path)
            await self.load_directory(self.current_path)
        elif entry.kind is EntryKind.DIRECTORY:
            self.current_path = join_path(self.current_path, entry.name)
            await self.load_directory(self.current_path)
        elif entry.kind is EntryKind.FILE:
            await self._open_file(entry)

    async def jump_to_breadcrumb(self, path: str) -> None:
        """Navigate to a breadcrumb's path, reloading even if already there."""
        self.current_path = normalize_path(path)
        await self.load_directory(self.current_path)

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self._notify()

    def set_view_mode(self, mode: ViewMode) -> None:
        """Switch the listing density and persist the choice."""
        self.view_mode = mode
        if self._preferences is not None:
            self._preferences.set(VIEW_MODE_KEY, mode.value)
        self._notify()

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    def breadcrumbs(self) -> list[Breadcrumb]:
        label = self.project.label if self.project else ""
        return build_breadcrumbs(label, self.current_path)

    def snapshot(self) -> NavigationView:
        return NavigationView(
            project=self.project,
            current_path=self.current_path,
            entries=tuple(self.entries),
            filtered_entries=tuple(self.filtered_entries),
            breadcrumbs=tuple(self.breadcrumbs()),
            search_query=self.search_query,
            view_mode=self.view_mode,
            loading=self.loading,
        )

    def subscribe(self, callback: NavigationListener) -> Callable[[], None]:
        """Register a listener called with a fresh snapshot after each change.

        Returns:
            A function to unregister the listener.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _open_file(self, entry: DirectoryEntry) -> None:
        project = self.project
        if project is None:
            return
        request = OpenFileRequest(
            name=entry.name,
            path=entry.path,
            project_path=project.path,
            project_name=project.name,
            is_image=entry.is_image,
        )
        if self._opener is None:
            log.debug("No opener registered, ignoring %s", entry.path)
            return
        result = self._opener(request)
        if inspect.isawaitable(result):
            await result

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.snapshot()
        for callback in list(self._listeners):
            try:
                callback(view)
            except Exception as e:
                log.warning("Navigation listener error: %s", e)
