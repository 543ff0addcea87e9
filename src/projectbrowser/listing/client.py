"""HTTP listing service backed by httpx."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from projectbrowser.errors import ListingFetchError
from projectbrowser.logging import get_logger
from projectbrowser.navigation.types import DEFAULT_ERROR_MESSAGE, DirectoryEntry

log = get_logger("listing")


class HttpListingService:
    """Lists project directories through the workspace server's REST API.

    Requests ``GET {base_url}/api/projects/{name}/files`` with an optional
    ``path`` query parameter and a Bearer token. Every failure is raised as
    :class:`ListingFetchError` carrying a user-facing message.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def list_directory(self, project_name: str, path: str) -> list[DirectoryEntry]:
        url = f"{self._base_url}/api/projects/{quote(project_name, safe='')}/files"
        params = {"path": path} if path else None

        try:
            response = await self._get_client().get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            log.warning("File fetch failed for %s:%r: %s", project_name, path, e)
            raise ListingFetchError(str(e) or DEFAULT_ERROR_MESSAGE) from e

        if not response.is_success:
            body = response.text.strip()
            log.warning("File fetch failed: %s %s", response.status_code, body)
            raise ListingFetchError(
                body or f"{DEFAULT_ERROR_MESSAGE} ({response.status_code})",
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            raise ListingFetchError(f"Invalid listing response: {e}") from e

        if not isinstance(data, list):
            raise ListingFetchError("Invalid listing response: expected a list of entries")

        return [DirectoryEntry.from_dict(item) for item in data if isinstance(item, dict)]

    async def aclose(self) -> None:
        """Close the underlying client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpListingService:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
