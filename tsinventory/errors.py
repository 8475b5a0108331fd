"""Exception hierarchy shared across tsinventory components."""

from __future__ import annotations


class TsInventoryError(RuntimeError):
    """Base class for failures surfaced to CLI and service callers."""


class ConfigError(TsInventoryError):
    """Raised when the configuration file cannot be parsed."""


class AcquisitionError(TsInventoryError):
    """Raised when a repository locator cannot be turned into a local tree."""


class ProjectError(TsInventoryError):
    """Raised when a project cannot be constructed from its compiler configuration."""


class SourceParseError(TsInventoryError):
    """Raised when a source file cannot be read or parsed into a usable tree."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


class AnalysisError(TsInventoryError):
    """Raised when an analysis run is aborted by a per-file failure."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "AcquisitionError",
    "AnalysisError",
    "ConfigError",
    "ProjectError",
    "SourceParseError",
    "TsInventoryError",
]
