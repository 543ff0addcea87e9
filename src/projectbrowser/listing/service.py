"""Collaborator protocols consumed by the navigator."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from projectbrowser.navigation.types import DirectoryEntry, OpenFileRequest


@runtime_checkable
class ListingService(Protocol):
    """Fetches the immediate children of a project directory."""

    async def list_directory(self, project_name: str, path: str) -> list[DirectoryEntry]:
        """Return the entries of ``path`` (``""`` for the project root).

        Raises:
            ListingFetchError: On transport, authorization or not-found failures.
        """
        ...


# Receives the request for an activated file; may be sync or async.
FileOpener = Callable[[OpenFileRequest], "Awaitable[None] | None"]
