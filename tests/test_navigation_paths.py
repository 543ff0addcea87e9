"""Tests for project-relative path helpers."""

from __future__ import annotations

import pytest

from projectbrowser.navigation.paths import (
    build_breadcrumbs,
    join_path,
    normalize_path,
    parent_of,
    split_path,
)
from projectbrowser.navigation.types import Breadcrumb


class TestParentOf:
    """Test parent path derivation."""

    def test_root_is_its_own_parent(self) -> None:
        assert parent_of("") == ""

    def test_single_segment(self) -> None:
        assert parent_of("src") == ""

    def test_nested(self) -> None:
        assert parent_of("src/components/ui") == "src/components"

    def test_ignores_empty_segments(self) -> None:
        assert parent_of("/src//components/") == "src"

    @pytest.mark.parametrize("path", ["a", "a/b", "a/b/c/d", "x/y/z/w/v/u"])
    def test_repeated_application_reaches_root(self, path: str) -> None:
        """Applying parent_of depth times reaches the root, and stays there."""
        current = path
        for _ in range(len(split_path(path))):
            current = parent_of(current)
        assert current == ""
        assert parent_of(current) == ""


class TestNormalizePath:
    """Test path normalization."""

    def test_strips_slashes(self) -> None:
        assert normalize_path("/src/lib/") == "src/lib"

    def test_resolves_dotdot(self) -> None:
        assert normalize_path("src/lib/../app") == "src/app"

    def test_dotdot_above_root_clamps(self) -> None:
        assert normalize_path("../../etc") == "etc"

    def test_drops_dot_segments(self) -> None:
        assert normalize_path("./src/./lib") == "src/lib"

    def test_backslashes(self) -> None:
        assert normalize_path("src\\lib") == "src/lib"

    def test_root(self) -> None:
        assert normalize_path("") == ""
        assert normalize_path("/") == ""
        assert normalize_path("..") == ""


class TestJoinPath:
    """Test joining a child name onto a directory."""

    def test_join_at_root(self) -> None:
        assert join_path("", "src") == "src"

    def test_join_nested(self) -> None:
        assert join_path("src", "lib") == "src/lib"

    def test_join_normalizes(self) -> None:
        assert join_path("src", "../docs") == "docs"


class TestBuildBreadcrumbs:
    """Test breadcrumb derivation."""

    def test_root_only(self) -> None:
        assert build_breadcrumbs("My Project", "") == [Breadcrumb("My Project", "")]

    def test_cumulative_paths(self) -> None:
        crumbs = build_breadcrumbs("proj", "src/components/ui")
        assert crumbs == [
            Breadcrumb("proj", ""),
            Breadcrumb("src", "src"),
            Breadcrumb("components", "src/components"),
            Breadcrumb("ui", "src/components/ui"),
        ]

    @pytest.mark.parametrize("path", ["", "a", "a/b", "a/b/c"])
    def test_length_and_ends(self, path: str) -> None:
        crumbs = build_breadcrumbs("proj", path)
        assert len(crumbs) == 1 + len(split_path(path))
        assert crumbs[0].path == ""
        assert crumbs[-1].path == path
