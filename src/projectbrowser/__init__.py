"""projectbrowser: Remote project file browser and assistant activity status."""

__version__ = "0.1.0"

# Public API
from projectbrowser.config import Config, get_config, load_config
from projectbrowser.errors import ListingFetchError, ProjectBrowserError
from projectbrowser.listing import HttpListingService, ListingService
from projectbrowser.navigation import (
    Breadcrumb,
    DirectoryEntry,
    EntryKind,
    NavigationView,
    Navigator,
    OpenFileRequest,
    Project,
    ViewMode,
)
from projectbrowser.preferences import MemoryPreferenceStore, PreferenceStore, YamlPreferenceStore
from projectbrowser.status import (
    ActiveTool,
    ExplicitStatus,
    StatusEngine,
    StatusSignal,
    StatusView,
    TokenUsage,
)

__all__ = [
    # Navigation
    "Navigator",
    "Breadcrumb",
    "DirectoryEntry",
    "EntryKind",
    "NavigationView",
    "OpenFileRequest",
    "Project",
    "ViewMode",
    # Listing
    "ListingService",
    "HttpListingService",
    # Preferences
    "PreferenceStore",
    "MemoryPreferenceStore",
    "YamlPreferenceStore",
    # Status
    "StatusEngine",
    "StatusSignal",
    "StatusView",
    "ExplicitStatus",
    "ActiveTool",
    "TokenUsage",
    # Config
    "Config",
    "load_config",
    "get_config",
    # Errors
    "ProjectBrowserError",
    "ListingFetchError",
]
