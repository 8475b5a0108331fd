"""Helper utilities for constructing temporary TypeScript projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping

from tsinventory.project import Project, load_project


class RepoBuilder:
    """Utility for writing files into a throwaway repository and loading it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the repository."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_tsconfig(self, data: Mapping[str, Any] | None = None, name: str = "tsconfig.json") -> Path:
        """Write a tsconfig file (defaults to an empty object)."""
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(dict(data or {}), indent=2), encoding="utf-8")
        return path

    def load(self, **kwargs: Any) -> Project:
        """Return a freshly loaded project for the repository."""
        return load_project(self.root, **kwargs)

    def path(self) -> Path:
        """Return the repository root path."""
        return self.root

    def file_path(self, relative: str) -> str:
        """Return the project-style absolute POSIX path of a repository file."""
        return (self.root / relative).resolve().as_posix()


__all__ = ["RepoBuilder"]
