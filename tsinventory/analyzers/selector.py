"""File selection: drop vendored dependency sources from a project."""

from __future__ import annotations

from typing import List, Sequence

from ..project import Project, SourceFile

DEFAULT_VENDOR_MARKERS = ("node_modules",)


def is_vendored(path: str, markers: Sequence[str] = DEFAULT_VENDOR_MARKERS) -> bool:
    """Return True when ``path`` contains any vendored-directory marker."""
    return any(marker and marker in path for marker in markers)


def select_source_files(
    project: Project, markers: Sequence[str] = DEFAULT_VENDOR_MARKERS
) -> List[SourceFile]:
    """Return the project's files outside vendored trees, in project order."""
    return [
        source_file
        for source_file in project.source_files
        if not is_vendored(source_file.path, markers)
    ]


__all__ = ["DEFAULT_VENDOR_MARKERS", "is_vendored", "select_source_files"]
