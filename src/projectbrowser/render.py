"""Terminal rendering of navigator and status views with rich."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath

from rich.console import RenderableType
from rich.table import Table
from rich.text import Text

from projectbrowser.navigation.types import (
    IMAGE_EXTENSIONS,
    DirectoryEntry,
    EntryKind,
    NavigationView,
    ViewMode,
)
from projectbrowser.status.signals import ColorTag, StatusView
from projectbrowser.status.tokens import format_tokens

CODE_EXTENSIONS = frozenset(
    {"js", "jsx", "ts", "tsx", "py", "java", "cpp", "c", "php", "rb", "go", "rs"}
)
DOC_EXTENSIONS = frozenset({"md", "txt", "doc", "pdf"})

_SIZE_UNITS = ("B", "KB", "MB", "GB")

_CATEGORY_STYLES = {
    "code": "green",
    "document": "blue",
    "image": "magenta",
    "other": "default",
}

_COLOR_STYLES = {
    ColorTag.BLUE: "bright_blue",
    ColorTag.PURPLE: "magenta",
    ColorTag.ORANGE: "dark_orange",
    ColorTag.YELLOW: "yellow",
    ColorTag.GREEN: "green",
}


def format_file_size(size: int | None) -> str:
    """Human-readable size in 1024 steps with at most one decimal."""
    if not size:
        return "0 B"
    exponent = 0
    value = float(size)
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    return f"{round(value, 1):g} {_SIZE_UNITS[exponent]}"


def format_relative_time(when: datetime | None, now: datetime | None = None) -> str:
    """Describe ``when`` relative to ``now``; dates older than 30 days are absolute."""
    if when is None:
        return "-"
    if now is None:
        now = datetime.now(when.tzinfo)
    seconds = int((now - when).total_seconds())

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        return f"{seconds // 60} min ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    if seconds < 2592000:
        return f"{seconds // 86400} days ago"
    return when.date().isoformat()


def file_category(name: str) -> str:
    """Classify a file name as code, document, image or other."""
    ext = PurePosixPath(name).suffix.lower().lstrip(".")
    if ext in CODE_EXTENSIONS:
        return "code"
    if ext in DOC_EXTENSIONS:
        return "document"
    if ext in IMAGE_EXTENSIONS:
        return "image"
    return "other"


def _entry_name(entry: DirectoryEntry) -> Text:
    if entry.kind is EntryKind.PARENT_LINK:
        return Text("..", style="dim")
    if entry.kind is EntryKind.DIRECTORY:
        return Text(f"{entry.name}/", style="bold cyan")
    return Text(entry.name, style=_CATEGORY_STYLES[file_category(entry.name)])


def render_breadcrumbs(view: NavigationView) -> Text:
    text = Text()
    for index, crumb in enumerate(view.breadcrumbs):
        if index:
            text.append(" › ", style="dim")
        is_last = index == len(view.breadcrumbs) - 1
        text.append(crumb.label, style="bold" if is_last else "dim")
    return text


def render_listing(view: NavigationView, now: datetime | None = None) -> RenderableType:
    """Render the filtered entries with columns chosen by the view mode."""
    if view.error_message is not None:
        return Text(view.error_message, style="red")
    if view.is_empty:
        return Text("No files found", style="dim")
    if not view.filtered_entries:
        return Text(f"No files match {view.search_query!r}", style="dim")

    table = Table(show_header=view.view_mode is ViewMode.DETAILED, box=None, pad_edge=False)
    table.add_column("Name", no_wrap=True)
    if view.view_mode is not ViewMode.SIMPLE:
        table.add_column("Size", justify="right", style="dim")
    if view.view_mode is ViewMode.DETAILED:
        table.add_column("Modified", style="dim")

    for entry in view.filtered_entries:
        is_file = entry.kind is EntryKind.FILE
        row: list[RenderableType] = [_entry_name(entry)]
        if view.view_mode is ViewMode.COMPACT:
            row.append(format_file_size(entry.size) if is_file else "")
        elif view.view_mode is ViewMode.DETAILED:
            row.append(format_file_size(entry.size) if is_file else "-")
            row.append(format_relative_time(entry.modified_at, now) if is_file else "-")
        table.add_row(*row)

    return table


def render_status(view: StatusView) -> Text:
    """One-line status: icon, label, elapsed time, tokens and stop hint."""
    if not view.visible:
        return Text()

    text = Text()
    text.append(view.display_icon, style=_COLOR_STYLES.get(view.color, "bright_blue"))
    text.append(" ")
    text.append(view.label, style="bold")
    text.append(f" ({view.elapsed_seconds}s)", style="dim")

    summary = view.token_summary
    if summary is not None:
        tokens = format_tokens(summary.input or summary.total)
        if summary.output > 0:
            tokens += f" / {format_tokens(summary.output)}"
        text.append(" · ", style="dim")
        text.append(f"⚡ {tokens}")

    if view.can_interrupt:
        text.append(" · ", style="dim")
        text.append("esc to stop", style="dim")
    return text
