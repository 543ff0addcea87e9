"""Platform-aware configuration path resolution.

Handles config file locations for:
- Windows: %PROGRAMDATA% (system), %APPDATA% (user)
- Unix: /etc/ (system), ~/.config/projectbrowser/ or ~/.pb/ (user)
- Project: $project_root/.pb/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "config.yaml"
PREFERENCES_FILENAME = "preferences.yaml"
APP_NAME = "projectbrowser"
SHORT_NAME = ".pb"


def get_system_config_path() -> Path | None:
    """Get system-level config path.

    Returns:
        Path to system config file, or None if not determinable.
        The file may not exist.
    """
    if sys.platform == "win32":
        program_data = os.environ.get("PROGRAMDATA")
        if program_data:
            return Path(program_data) / APP_NAME / CONFIG_FILENAME
    else:
        return Path("/etc") / APP_NAME / CONFIG_FILENAME
    return None


def get_user_config_dir() -> Path | None:
    """Get the per-user directory holding config and preferences.

    Returns:
        Directory path, or None if not determinable. It may not exist.
    """
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return None

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME

    home = Path.home()

    # Prefer ~/.config/projectbrowser if ~/.config exists
    xdg_default = home / ".config"
    if xdg_default.exists():
        return xdg_default / APP_NAME

    return home / SHORT_NAME


def get_user_config_path() -> Path | None:
    """Get user-level config path.

    Returns:
        Path to user config file, or None if not determinable.
        The file may not exist.
    """
    config_dir = get_user_config_dir()
    if config_dir is None:
        return None
    return config_dir / CONFIG_FILENAME


def get_user_preferences_path() -> Path | None:
    """Get the default location of the preference store file."""
    config_dir = get_user_config_dir()
    if config_dir is None:
        return None
    return config_dir / PREFERENCES_FILENAME


def get_project_config_path(project_root: str) -> Path:
    """Get project-level config path.

    Args:
        project_root: The local project directory.

    Returns:
        Path to project config file (may not exist).
    """
    return Path(project_root) / SHORT_NAME / CONFIG_FILENAME


def get_config_paths(project_root: str | None = None) -> list[Path]:
    """Get all config paths in priority order (lowest to highest).

    Args:
        project_root: Optional project directory for project-level config.

    Returns:
        List of config paths in order: system, user, project.
        Later paths override earlier ones when merging.
    """
    paths: list[Path] = []

    system_path = get_system_config_path()
    if system_path:
        paths.append(system_path)

    user_path = get_user_config_path()
    if user_path:
        paths.append(user_path)

    if project_root:
        paths.append(get_project_config_path(project_root))

    return paths
