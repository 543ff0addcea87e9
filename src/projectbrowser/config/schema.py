"""Configuration schema dataclasses for projectbrowser.

Defines the structure of configuration at all levels (system, user, project).
All fields have defaults so partial configs merge together cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_TOKEN_LIMIT = 160_000


@dataclass
class ServerConfig:
    """Remote workspace server connection.

    Example config.yaml:
        server:
          base_url: "http://localhost:3001"
          timeout: 15.0
    """

    base_url: str = "http://localhost:3001"
    token: str | None = None  # Bearer token; prefer PB_TOKEN over writing it to disk
    timeout: float = 30.0  # Seconds per listing request


@dataclass
class BrowserConfig:
    """File browser defaults."""

    default_view_mode: str = "detailed"  # simple, compact, detailed
    preferences_file: str | None = None  # Default: <user config dir>/preferences.yaml


@dataclass
class StatusConfig:
    """Activity status indicator tuning."""

    provider: str = "claude"  # Label used during the startup grace period
    token_limit: int = DEFAULT_TOKEN_LIMIT  # Assumed budget when only "used" is reported
    silence_timeout: float = 8.0  # Seconds without activity before "waiting for response"
    tick_interval: float = 1.0  # Elapsed-seconds clock
    animation_interval: float = 0.5  # Spinner clock


@dataclass
class UpdateConfig:
    """Release update check.

    Example config.yaml:
        updates:
          enabled: true
          owner: "example"
          repo: "projectbrowser"
    """

    enabled: bool = True
    owner: str | None = None
    repo: str | None = None
    check_interval: float = 300.0  # Seconds between checks


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, takes precedence over level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    status: StatusConfig = field(default_factory=StatusConfig)
    updates: UpdateConfig = field(default_factory=UpdateConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections, kept for extensions
    extra: dict[str, Any] = field(default_factory=dict)
