"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Config caching
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from projectbrowser.config.merge import merge_configs
from projectbrowser.config.paths import get_config_paths
from projectbrowser.config.schema import (
    DEFAULT_TOKEN_LIMIT,
    BrowserConfig,
    Config,
    LoggingConfig,
    ServerConfig,
    StatusConfig,
    UpdateConfig,
)

# Module logger (may not be configured yet at import time)
_log = logging.getLogger("projectbrowser.config")

_cached_config: Config | None = None


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML as dict, or empty dict on error.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables.

    Environment variables take highest priority.

    Returns:
        Config dict with values from environment.
    """
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("PB_LOG")
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    server_url = os.environ.get("PB_SERVER_URL")
    if server_url:
        overrides.setdefault("server", {})["base_url"] = server_url

    token = os.environ.get("PB_TOKEN")
    if token:
        overrides.setdefault("server", {})["token"] = token

    return overrides


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass.

    Args:
        data: Merged configuration dictionary.

    Returns:
        Typed Config object.
    """
    server_data = _section(data, "server")
    server = ServerConfig(
        base_url=server_data.get("base_url", ServerConfig.base_url),
        token=server_data.get("token"),
        timeout=float(server_data.get("timeout", ServerConfig.timeout)),
    )

    browser_data = _section(data, "browser")
    browser = BrowserConfig(
        default_view_mode=browser_data.get("default_view_mode", BrowserConfig.default_view_mode),
        preferences_file=browser_data.get("preferences_file"),
    )

    status_data = _section(data, "status")
    status = StatusConfig(
        provider=status_data.get("provider", StatusConfig.provider),
        token_limit=int(status_data.get("token_limit", DEFAULT_TOKEN_LIMIT)),
        silence_timeout=float(status_data.get("silence_timeout", StatusConfig.silence_timeout)),
        tick_interval=float(status_data.get("tick_interval", StatusConfig.tick_interval)),
        animation_interval=float(
            status_data.get("animation_interval", StatusConfig.animation_interval)
        ),
    )

    updates_data = _section(data, "updates")
    updates = UpdateConfig(
        enabled=bool(updates_data.get("enabled", True)),
        owner=updates_data.get("owner"),
        repo=updates_data.get("repo"),
        check_interval=float(updates_data.get("check_interval", UpdateConfig.check_interval)),
    )

    log_data = _section(data, "logging")
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    known_keys = {"server", "browser", "status", "updates", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(
        server=server,
        browser=browser,
        status=status,
        updates=updates,
        logging=logging_config,
        extra=extra,
    )


def load_config(
    project_root: str | None = None,
    reload: bool = False,
    extra_paths: list[Path] | None = None,
) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Explicit files (``extra_paths``, e.g. ``--config``)
    3. Project config ($project_root/.pb/config.yaml)
    4. User config (~/.config/projectbrowser/ or %APPDATA%)
    5. System config (/etc/projectbrowser/ or %PROGRAMDATA%)

    Args:
        project_root: Local project directory for project-level config.
        reload: Force reload even if cached.
        extra_paths: Additional YAML files merged after the standard ones.

    Returns:
        Merged Config object.
    """
    global _cached_config

    is_global = project_root is None and not extra_paths
    if _cached_config is not None and not reload and is_global:
        return _cached_config

    configs: list[dict[str, Any]] = []

    for path in [*get_config_paths(project_root), *(extra_paths or [])]:
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    env_config = env_overrides()
    if env_config:
        configs.append(env_config)

    config = dict_to_config(merge_configs(*configs))

    if is_global:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config.

    Useful for testing or forcing a reload.
    """
    global _cached_config
    _cached_config = None
