"""Tests for terminal rendering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from projectbrowser.navigation import (
    Breadcrumb,
    DirectoryEntry,
    NavigationView,
    Project,
    ViewMode,
)
from projectbrowser.render import (
    file_category,
    format_file_size,
    format_relative_time,
    render_breadcrumbs,
    render_listing,
    render_status,
)
from projectbrowser.status.signals import HIDDEN_VIEW, StatusView, TokenSummary
from tests.utils import dir_entry, file_entry

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def to_text(renderable) -> str:
    console = Console(width=100, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def make_view(
    entries: list[DirectoryEntry],
    *,
    query: str = "",
    mode: ViewMode = ViewMode.DETAILED,
    filtered: list[DirectoryEntry] | None = None,
) -> NavigationView:
    return NavigationView(
        project=Project("demo"),
        current_path="src",
        entries=tuple(entries),
        filtered_entries=tuple(entries if filtered is None else filtered),
        breadcrumbs=(Breadcrumb("Demo", ""), Breadcrumb("src", "src")),
        search_query=query,
        view_mode=mode,
        loading=False,
    )


class TestFormatFileSize:
    """Test human-readable sizes."""

    @pytest.mark.parametrize(
        "size,expected",
        [
            (None, "0 B"),
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1 MB"),
            (3 * 1024**3, "3 GB"),
        ],
    )
    def test_sizes(self, size: int | None, expected: str) -> None:
        assert format_file_size(size) == expected


class TestFormatRelativeTime:
    """Test relative timestamps."""

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=5), "5 min ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=2), "2 days ago"),
            (timedelta(days=45), "2024-04-17"),
        ],
    )
    def test_relative(self, delta: timedelta, expected: str) -> None:
        assert format_relative_time(NOW - delta, NOW) == expected

    def test_none(self) -> None:
        assert format_relative_time(None, NOW) == "-"


class TestFileCategory:
    """Test file classification."""

    @pytest.mark.parametrize(
        "name,category",
        [
            ("main.py", "code"),
            ("App.TSX", "code"),
            ("README.md", "document"),
            ("logo.png", "image"),
            ("Makefile", "other"),
        ],
    )
    def test_category(self, name: str, category: str) -> None:
        assert file_category(name) == category


class TestRenderListing:
    """Test listing rendering per view mode."""

    def test_detailed_has_header_and_columns(self) -> None:
        entry = DirectoryEntry.from_dict(
            {"name": "app.py", "type": "file", "size": 1536, "modified": "2024-06-01T11:55:00Z"}
        )
        text = to_text(
            render_listing(make_view([DirectoryEntry.parent_link(""), entry]), now=NOW)
        )
        assert "Name" in text
        assert "Modified" in text
        assert "1.5 KB" in text
        assert "5 min ago" in text
        assert ".." in text

    def test_compact_has_size_without_header(self) -> None:
        text = to_text(render_listing(make_view([file_entry("a.txt", 2048)], mode=ViewMode.COMPACT)))
        assert "2 KB" in text
        assert "Name" not in text

    def test_simple_has_names_only(self) -> None:
        view = make_view([dir_entry("lib"), file_entry("a.txt", 2048)], mode=ViewMode.SIMPLE)
        text = to_text(render_listing(view))
        assert "lib/" in text
        assert "a.txt" in text
        assert "KB" not in text

    def test_error_message(self) -> None:
        text = to_text(render_listing(make_view([DirectoryEntry.error("Access denied")])))
        assert text.strip() == "Access denied"

    def test_empty_directory(self) -> None:
        assert to_text(render_listing(make_view([]))).strip() == "No files found"

    def test_no_matches(self) -> None:
        view = make_view([file_entry("a.txt")], query="zzz", filtered=[])
        assert to_text(render_listing(view)).strip() == "No files match 'zzz'"


class TestRenderBreadcrumbs:
    """Test breadcrumb rendering."""

    def test_separator(self) -> None:
        assert render_breadcrumbs(make_view([])).plain == "Demo › src"


class TestRenderStatus:
    """Test the status line."""

    def test_hidden(self) -> None:
        assert render_status(HIDDEN_VIEW).plain == ""

    def test_detailed_tokens(self) -> None:
        view = StatusView(
            visible=True,
            label="Working",
            elapsed_seconds=12,
            token_summary=TokenSummary(input=1500, output=200),
        )
        assert render_status(view).plain == "✻ Working (12s) · ⚡ 1.5k / 200 · esc to stop"

    def test_simple_tokens_without_interrupt(self) -> None:
        view = StatusView(
            visible=True,
            label="Deploying",
            icon="🚀",
            elapsed_seconds=3,
            token_summary=TokenSummary(total=5000, limit=160_000),
            can_interrupt=False,
        )
        assert render_status(view).plain == "🚀 Deploying (3s) · ⚡ 5.0k"

    def test_spinner_frame(self) -> None:
        view = StatusView(visible=True, label="Thinking", animation_phase=2)
        assert render_status(view).plain.startswith("✸ Thinking")
