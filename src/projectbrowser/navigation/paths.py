"""Pure helpers for project-relative paths.

Paths are ``/``-joined segment lists relative to the project root. The root
itself is ``""``. Stored paths never carry a leading or trailing slash, an
empty segment, ``.`` or ``..``.
"""

from __future__ import annotations

from projectbrowser.navigation.types import Breadcrumb


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def normalize_path(path: str) -> str:
    """Resolve ``.`` and ``..`` segments and strip stray slashes.

    ``..`` above the root clamps at the root, so the result is always a
    valid stored path.
    """
    resolved: list[str] = []
    for segment in split_path(path.replace("\\", "/")):
        if segment == ".":
            continue
        if segment == "..":
            if resolved:
                resolved.pop()
            continue
        resolved.append(segment)
    return "/".join(resolved)


def parent_of(path: str) -> str:
    """Return the parent of ``path``; the root is its own parent."""
    return "/".join(split_path(path)[:-1])


def join_path(base: str, name: str) -> str:
    """Append ``name`` to ``base`` and normalize the result."""
    if not base:
        return normalize_path(name)
    return normalize_path(f"{base}/{name}")


def build_breadcrumbs(root_label: str, path: str) -> list[Breadcrumb]:
    """Derive the breadcrumb trail for ``path``.

    The first crumb is always the project root at ``""``; each further crumb
    carries the cumulative path of one segment.
    """
    crumbs = [Breadcrumb(label=root_label, path="")]
    built: list[str] = []
    for segment in split_path(path):
        built.append(segment)
        crumbs.append(Breadcrumb(label=segment, path="/".join(built)))
    return crumbs
