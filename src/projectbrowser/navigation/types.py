"""Value types for the directory navigator.

This module defines:
- EntryKind: Tagged variant for listing entries (files, dirs, synthetic entries)
- DirectoryEntry: One row of a directory listing
- ViewMode: Persisted listing density preference
- Project, Breadcrumb, OpenFileRequest, NavigationView
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

PARENT_LINK_NAME = ".."
DEFAULT_ERROR_MESSAGE = "Failed to load files"

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "svg", "webp", "ico", "bmp"})


class EntryKind(Enum):
    """Kind of a listing entry.

    - FILE / DIRECTORY: Entries reported by the listing service
    - PARENT_LINK: Synthetic "go up" entry, never part of server data
    - ERROR: Placeholder standing in for a failed listing
    """

    FILE = "file"
    DIRECTORY = "directory"
    PARENT_LINK = "parent"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value

    @property
    def is_synthetic(self) -> bool:
        """True for entries the navigator adds itself."""
        return self in (EntryKind.PARENT_LINK, EntryKind.ERROR)


class ViewMode(Enum):
    """Listing density, persisted across sessions."""

    SIMPLE = "simple"
    COMPACT = "compact"
    DETAILED = "detailed"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | None) -> ViewMode | None:
        """Return the mode named by ``value``, or None if it names none."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    # fromisoformat() rejects a trailing "Z" before Python 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class DirectoryEntry:
    """One entry of a directory listing.

    Attributes:
        name: Base name within the parent directory
        kind: Entry variant
        path: Path relative to the project root; for PARENT_LINK, the
            path the link navigates to
        size: Size in bytes (files only)
        modified_at: Last modification time (files only)
        error_message: Failure description (ERROR only)
    """

    name: str
    kind: EntryKind
    path: str = ""
    size: int | None = None
    modified_at: datetime | None = None
    error_message: str | None = None

    @classmethod
    def parent_link(cls, target: str) -> DirectoryEntry:
        """Create the synthetic entry that navigates to ``target``."""
        return cls(name=PARENT_LINK_NAME, kind=EntryKind.PARENT_LINK, path=target)

    @classmethod
    def error(cls, message: str | None) -> DirectoryEntry:
        """Create the placeholder entry for a failed listing."""
        return cls(
            name="",
            kind=EntryKind.ERROR,
            error_message=message or DEFAULT_ERROR_MESSAGE,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DirectoryEntry:
        """Build an entry from the listing service's JSON object.

        Expected keys: ``name``, ``type`` ("file" or "directory"), ``path``,
        and for files optionally ``size`` and ``modified``.
        """
        kind = EntryKind.DIRECTORY if data.get("type") == "directory" else EntryKind.FILE
        name = str(data.get("name", ""))
        size = data.get("size")
        is_file = kind is EntryKind.FILE
        return cls(
            name=name,
            kind=kind,
            path=str(data.get("path") or name),
            size=int(size) if is_file and isinstance(size, (int, float)) and size >= 0 else None,
            modified_at=_parse_timestamp(data.get("modified")) if is_file else None,
        )

    @property
    def is_image(self) -> bool:
        """True for files the image viewer handles."""
        if self.kind is not EntryKind.FILE:
            return False
        return PurePosixPath(self.name).suffix.lower().lstrip(".") in IMAGE_EXTENSIONS


@dataclass(frozen=True)
class Project:
    """A project on the remote workspace server.

    Attributes:
        name: Identifier the listing service knows the project by
        path: Project root on the server
        display_name: Label for the root breadcrumb (defaults to ``name``)
    """

    name: str
    path: str = ""
    display_name: str | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


@dataclass(frozen=True)
class Breadcrumb:
    """One step of the trail from the project root to the current directory."""

    label: str
    path: str


@dataclass(frozen=True)
class OpenFileRequest:
    """Payload handed to the file opener when a file entry is activated."""

    name: str
    path: str
    project_path: str
    project_name: str
    is_image: bool = False


@dataclass(frozen=True)
class NavigationView:
    """Read-only snapshot of navigator state for the presentation layer."""

    project: Project | None
    current_path: str
    entries: tuple[DirectoryEntry, ...]
    filtered_entries: tuple[DirectoryEntry, ...]
    breadcrumbs: tuple[Breadcrumb, ...]
    search_query: str
    view_mode: ViewMode
    loading: bool

    @property
    def error_message(self) -> str | None:
        """Message of the error placeholder, if the listing failed."""
        if len(self.entries) == 1 and self.entries[0].kind is EntryKind.ERROR:
            return self.entries[0].error_message
        return None

    @property
    def is_empty(self) -> bool:
        return not self.entries
