"""Tests for preference stores."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from projectbrowser.navigation import ViewMode, load_view_mode
from projectbrowser.preferences import (
    VIEW_MODE_KEY,
    MemoryPreferenceStore,
    PreferenceStore,
    YamlPreferenceStore,
)


class TestMemoryPreferenceStore:
    """Test the in-memory store."""

    def test_get_missing(self) -> None:
        assert MemoryPreferenceStore().get("x") is None

    def test_set_then_get(self) -> None:
        store = MemoryPreferenceStore()
        store.set("x", "1")
        assert store.get("x") == "1"

    def test_initial_values_copied(self) -> None:
        initial = {"x": "1"}
        store = MemoryPreferenceStore(initial)
        store.set("x", "2")
        assert initial["x"] == "1"

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryPreferenceStore(), PreferenceStore)


class TestYamlPreferenceStore:
    """Test the YAML-file store."""

    def test_missing_file(self, tmp_path: Path) -> None:
        assert YamlPreferenceStore(tmp_path / "prefs.yaml").get(VIEW_MODE_KEY) is None

    def test_set_creates_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "prefs.yaml"
        YamlPreferenceStore(path).set(VIEW_MODE_KEY, "compact")

        assert yaml.safe_load(path.read_text()) == {VIEW_MODE_KEY: "compact"}

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.yaml"
        YamlPreferenceStore(path).set(VIEW_MODE_KEY, "simple")
        assert YamlPreferenceStore(path).get(VIEW_MODE_KEY) == "simple"

    def test_keeps_other_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.yaml"
        path.write_text("theme: dark\n")

        YamlPreferenceStore(path).set(VIEW_MODE_KEY, "simple")

        assert yaml.safe_load(path.read_text()) == {"theme": "dark", VIEW_MODE_KEY: "simple"}

    def test_invalid_file_reads_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "prefs.yaml"
        path.write_text("[not, a, mapping]")
        assert YamlPreferenceStore(path).get(VIEW_MODE_KEY) is None

    def test_write_failure_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = YamlPreferenceStore(blocker / "prefs.yaml")

        store.set(VIEW_MODE_KEY, "simple")

        assert "Could not save preferences" in caplog.text


class TestLoadViewMode:
    """Test reading the view-mode preference."""

    @pytest.mark.parametrize(
        "stored,expected",
        [
            ("simple", ViewMode.SIMPLE),
            ("COMPACT", ViewMode.COMPACT),
            ("detailed", ViewMode.DETAILED),
            (None, ViewMode.DETAILED),
            ("grid", ViewMode.DETAILED),
        ],
    )
    def test_values(self, stored: str | None, expected: ViewMode) -> None:
        store = MemoryPreferenceStore({VIEW_MODE_KEY: stored} if stored else None)
        assert load_view_mode(store) is expected
