"""Key-value preference stores.

The navigator persists a single preference, the listing view mode, under
:data:`VIEW_MODE_KEY`. Stores are injected so tests can use the in-memory
variant.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

import yaml

from projectbrowser.config.loader import load_yaml_file
from projectbrowser.logging import get_logger

log = get_logger("preferences")

VIEW_MODE_KEY = "file-tree-view-mode"


@runtime_checkable
class PreferenceStore(Protocol):
    """String key-value store with explicit get/set."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryPreferenceStore:
    """Process-local store, mainly for tests and one-shot CLI runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class YamlPreferenceStore:
    """Preferences persisted as a flat YAML mapping.

    The file is re-read on every ``get`` so several processes see each
    other's writes. Unreadable files behave as empty; write failures are
    logged and otherwise ignored, since losing a preference is not fatal.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, str]:
        data = load_yaml_file(self.path)
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
        except OSError as e:
            log.warning("Could not save preferences to %s: %s", self.path, e)

