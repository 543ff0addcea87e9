"""Exception types raised by projectbrowser collaborators.

Path problems (``..`` segments, stray slashes) are not errors: they are
normalized by :func:`projectbrowser.navigation.paths.normalize_path`.
"""

from __future__ import annotations


class ProjectBrowserError(Exception):
    """Base class for projectbrowser errors."""


class ListingFetchError(ProjectBrowserError):
    """A directory listing could not be fetched.

    Covers transport failures, authorization failures and missing paths.
    The message is meant to be shown to the user as-is.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
