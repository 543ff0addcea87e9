"""Command-line interface for projectbrowser."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from projectbrowser import __version__
from projectbrowser.config import Config, get_user_preferences_path, load_config
from projectbrowser.listing import HttpListingService
from projectbrowser.logging import get_logger, setup_logging
from projectbrowser.navigation import Navigator, Project, ViewMode, load_view_mode
from projectbrowser.preferences import (
    VIEW_MODE_KEY,
    MemoryPreferenceStore,
    PreferenceStore,
    YamlPreferenceStore,
)
from projectbrowser.render import render_breadcrumbs, render_listing
from projectbrowser.updates import UpdateChecker

console = Console()
log = get_logger("cli")

_VIEW_MODES = [mode.value for mode in ViewMode]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="projectbrowser",
        description="Browse remote project workspaces from the terminal",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Extra config file merged over the standard locations",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    ls_parser = subparsers.add_parser(
        "ls",
        help="List a directory of a remote project",
    )
    ls_parser.add_argument(
        "path",
        nargs="?",
        default="",
        help="Directory relative to the project root (default: root)",
    )
    ls_parser.add_argument(
        "--project",
        required=True,
        help="Project name as known to the server",
    )
    ls_parser.add_argument(
        "--display-name",
        help="Label for the root breadcrumb",
    )
    ls_parser.add_argument(
        "--filter",
        default="",
        help="Only show entries whose name contains this text",
    )
    ls_parser.add_argument(
        "--view",
        choices=_VIEW_MODES,
        help="View mode for this listing (does not change the saved preference)",
    )

    view_parser = subparsers.add_parser(
        "view-mode",
        help="Show or set the saved view mode",
    )
    view_parser.add_argument(
        "mode",
        nargs="?",
        choices=_VIEW_MODES,
        help="New view mode",
    )

    update_parser = subparsers.add_parser(
        "check-update",
        help="Check for a newer release",
    )
    update_parser.add_argument("--owner", help="GitHub owner (default: updates.owner)")
    update_parser.add_argument("--repo", help="GitHub repository (default: updates.repo)")

    return parser


def _load_config(parsed: argparse.Namespace) -> Config:
    config = load_config(extra_paths=[parsed.config] if parsed.config else None)
    if parsed.verbose:
        verbose = min(4, 2 + parsed.verbose)
        config = dataclasses.replace(
            config, logging=dataclasses.replace(config.logging, verbose=verbose)
        )
    setup_logging(config.logging)
    return config


def _preference_store(config: Config) -> PreferenceStore:
    if config.browser.preferences_file:
        return YamlPreferenceStore(Path(config.browser.preferences_file).expanduser())
    path = get_user_preferences_path()
    if path is None:
        log.warning("No user config directory; view mode will not be saved")
        return MemoryPreferenceStore()
    return YamlPreferenceStore(path)


async def _cmd_ls(config: Config, parsed: argparse.Namespace) -> int:
    default_mode = ViewMode.parse(config.browser.default_view_mode) or ViewMode.DETAILED
    async with HttpListingService(
        config.server.base_url,
        token=config.server.token,
        timeout=config.server.timeout,
    ) as listing:
        navigator = Navigator(
            listing,
            preferences=_preference_store(config),
            default_view_mode=default_mode,
        )
        await navigator.select_project(
            Project(name=parsed.project, display_name=parsed.display_name)
        )
        if parsed.path:
            await navigator.jump_to_breadcrumb(parsed.path)
        if parsed.filter:
            navigator.set_search_query(parsed.filter)

    view = navigator.snapshot()
    if parsed.view:
        view = dataclasses.replace(view, view_mode=ViewMode(parsed.view))

    console.print(render_breadcrumbs(view))
    console.print(render_listing(view))
    return 1 if view.error_message is not None else 0


def _cmd_view_mode(config: Config, parsed: argparse.Namespace) -> int:
    store = _preference_store(config)
    if parsed.mode:
        store.set(VIEW_MODE_KEY, ViewMode(parsed.mode).value)
    default_mode = ViewMode.parse(config.browser.default_view_mode) or ViewMode.DETAILED
    console.print(load_view_mode(store, default_mode).value)
    return 0


async def _cmd_check_update(config: Config, parsed: argparse.Namespace) -> int:
    owner = parsed.owner or config.updates.owner
    repo = parsed.repo or config.updates.repo
    if not owner or not repo:
        console.print("[red]No repository configured (set updates.owner and updates.repo)[/red]")
        return 2

    status = await UpdateChecker(owner, repo).check()
    if status.update_available and status.release is not None:
        console.print(
            f"Update available: {status.current_version} -> {status.latest_version}"
        )
        console.print(status.release.html_url)
    else:
        console.print(f"Up to date ({status.current_version})")
    return 0


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 1

    config = _load_config(parsed)

    if parsed.command == "ls":
        return asyncio.run(_cmd_ls(config, parsed))
    if parsed.command == "view-mode":
        return _cmd_view_mode(config, parsed)
    if parsed.command == "check-update":
        return asyncio.run(_cmd_check_update(config, parsed))

    parser.print_help()
    return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(run_cli(sys.argv[1:]))
