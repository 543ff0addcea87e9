"""Root pytest configuration for all tests."""

from __future__ import annotations

import pytest

from projectbrowser.config import reset_config

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep user config and env vars of the machine out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("PB_LOG", "PB_SERVER_URL", "PB_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
