"""Pipeline orchestration: locator -> checkout -> project -> declaration catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from .analyzers.engine import analyze_project
from .config import InventoryConfig, load_config
from .git.clone import RepoAcquirer, redact_locator
from .logging import get_logger
from .models import AnalysisResult
from .project import Project, load_project


class Orchestrator:
    """Coordinates acquisition, project loading and analysis for one request."""

    def __init__(
        self,
        config: InventoryConfig | None = None,
        acquirer: RepoAcquirer | None = None,
        project_loader: Optional[Callable[..., Project]] = None,
        *,
        allow_local: bool = True,
    ) -> None:
        self.config = config or load_config(Path.cwd())
        self.acquirer = acquirer or RepoAcquirer(
            depth=self.config.clone.depth,
            timeout=self.config.clone.timeout,
            allow_local=allow_local,
        )
        self._project_loader = project_loader or load_project
        self.logger = get_logger("orchestrator")

    def run_analysis(self, locator: str) -> AnalysisResult:
        """Analyze the repository behind ``locator``.

        Any temporary checkout is removed before this returns or raises.
        """
        settings = self.config.analysis
        self.logger.info("Starting analysis of %s", redact_locator(locator))
        with self.acquirer.checkout(locator) as root:
            project = self._project_loader(
                root,
                tsconfig=settings.tsconfig,
                require_tsconfig=settings.require_tsconfig,
            )
            self.logger.debug(
                "Project %s loaded with %d files", project.root, len(project.source_files)
            )
            result = analyze_project(
                project,
                vendor_markers=settings.vendor_markers,
                on_parse_error=settings.on_parse_error,
                workers=settings.workers,
            )
        self.logger.info("Analysis produced %d file records", len(result.files))
        return result


__all__ = ["Orchestrator"]
