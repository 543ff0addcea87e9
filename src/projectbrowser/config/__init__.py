"""Configuration management for projectbrowser.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/projectbrowser/ or %PROGRAMDATA%)
- User-level config (~/.config/projectbrowser/, ~/.pb/ or %APPDATA%)
- Project-level config ($project_root/.pb/)
- Environment variable overrides (highest priority)

Example usage:
    from projectbrowser.config import load_config

    config = load_config(project_root="/path/to/checkout")
    print(config.server.base_url)
    print(config.status.token_limit)
"""

from projectbrowser.config.loader import (
    get_config,
    load_config,
    reset_config,
)
from projectbrowser.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
    get_user_preferences_path,
)
from projectbrowser.config.schema import (
    BrowserConfig,
    Config,
    LoggingConfig,
    ServerConfig,
    StatusConfig,
    UpdateConfig,
)

__all__ = [
    # Main API
    "load_config",
    "get_config",
    "reset_config",
    # Paths
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_user_preferences_path",
    "get_project_config_path",
    # Schema
    "Config",
    "ServerConfig",
    "BrowserConfig",
    "StatusConfig",
    "UpdateConfig",
    "LoggingConfig",
]
