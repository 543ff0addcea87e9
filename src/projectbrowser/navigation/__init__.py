"""Directory navigation over a remote project workspace."""

from projectbrowser.navigation.paths import (
    build_breadcrumbs,
    join_path,
    normalize_path,
    parent_of,
    split_path,
)
from projectbrowser.navigation.types import (
    Breadcrumb,
    DirectoryEntry,
    EntryKind,
    NavigationView,
    OpenFileRequest,
    Project,
    ViewMode,
)
from projectbrowser.navigation.navigator import Navigator, filter_entries, load_view_mode

__all__ = [
    # Engine
    "Navigator",
    "filter_entries",
    "load_view_mode",
    # Types
    "Breadcrumb",
    "DirectoryEntry",
    "EntryKind",
    "NavigationView",
    "OpenFileRequest",
    "Project",
    "ViewMode",
    # Paths
    "build_breadcrumbs",
    "join_path",
    "normalize_path",
    "parent_of",
    "split_path",
]
