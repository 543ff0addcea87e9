"""Tests for the HTTP listing service.

Uses httpx.MockTransport so no server is needed.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from projectbrowser.errors import ListingFetchError
from projectbrowser.listing import HttpListingService, ListingService
from projectbrowser.navigation.types import DirectoryEntry, EntryKind

LISTING = [
    {"name": "src", "type": "directory", "path": "src"},
    {
        "name": "app.py",
        "type": "file",
        "path": "app.py",
        "size": 2048,
        "modified": "2024-05-01T12:00:00Z",
    },
]


def make_service(handler, token: str | None = "secret") -> HttpListingService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpListingService("http://server:3001/", token=token, client=client)


class TestRequest:
    """Test request construction."""

    @pytest.mark.asyncio
    async def test_root_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await make_service(handler).list_directory("demo", "")

        assert str(seen[0].url) == "http://server:3001/api/projects/demo/files"
        assert seen[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_path_query_parameter(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await make_service(handler, token=None).list_directory("demo", "src/lib")

        assert seen[0].url.params["path"] == "src/lib"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_project_name_is_escaped(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await make_service(handler).list_directory("team/app #1?", "")

        assert seen[0].url.raw_path == b"/api/projects/team%2Fapp%20%231%3F/files"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpListingService("http://x"), ListingService)


class TestResponse:
    """Test response parsing and error mapping."""

    @pytest.mark.asyncio
    async def test_parses_entries(self) -> None:
        service = make_service(lambda request: httpx.Response(200, json=LISTING))

        entries = await service.list_directory("demo", "")

        assert entries[0] == DirectoryEntry(name="src", kind=EntryKind.DIRECTORY, path="src")
        assert entries[1].kind is EntryKind.FILE
        assert entries[1].size == 2048
        assert entries[1].modified_at == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_skips_non_object_items(self) -> None:
        service = make_service(lambda request: httpx.Response(200, json=["junk", LISTING[0]]))
        assert len(await service.list_directory("demo", "")) == 1

    @pytest.mark.asyncio
    async def test_error_status_uses_body(self) -> None:
        service = make_service(lambda request: httpx.Response(403, text="Access denied"))

        with pytest.raises(ListingFetchError) as exc_info:
            await service.list_directory("demo", "private")

        assert exc_info.value.message == "Access denied"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_error_status_without_body(self) -> None:
        service = make_service(lambda request: httpx.Response(500))

        with pytest.raises(ListingFetchError) as exc_info:
            await service.list_directory("demo", "")

        assert exc_info.value.message == "Failed to load files (500)"

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(ListingFetchError, match="Connection refused"):
            await make_service(handler).list_directory("demo", "")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        service = make_service(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ListingFetchError, match="Invalid listing response"):
            await service.list_directory("demo", "")

    @pytest.mark.asyncio
    async def test_non_list_payload(self) -> None:
        service = make_service(lambda request: httpx.Response(200, json={"files": []}))
        with pytest.raises(ListingFetchError, match="expected a list"):
            await service.list_directory("demo", "")


class TestDirectoryEntryFromDict:
    """Test wire-format parsing of single entries."""

    def test_directory_drops_file_fields(self) -> None:
        entry = DirectoryEntry.from_dict(
            {"name": "lib", "type": "directory", "size": 4096, "modified": "2024-01-01"}
        )
        assert entry.size is None
        assert entry.modified_at is None
        assert entry.path == "lib"

    def test_bad_timestamp_ignored(self) -> None:
        entry = DirectoryEntry.from_dict({"name": "a.txt", "type": "file", "modified": "yesterday"})
        assert entry.modified_at is None

    @pytest.mark.parametrize("name", ["logo.PNG", "pic.jpeg", "icon.svg"])
    def test_image_detection(self, name: str) -> None:
        assert DirectoryEntry.from_dict({"name": name, "type": "file"}).is_image

    def test_non_image(self) -> None:
        assert not DirectoryEntry.from_dict({"name": "main.py", "type": "file"}).is_image


class TestClientLifecycle:
    """Test client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with HttpListingService("http://x", client=client):
            pass
        assert not client.is_closed
        await client.aclose()
