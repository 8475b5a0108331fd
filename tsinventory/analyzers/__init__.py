"""Declaration inventory core: file selection, classification and assembly."""

from __future__ import annotations

from .classifier import REACT_MARKER, classify_source_file
from .engine import ABORT, PARSE_ERROR_POLICIES, SKIP, analyze_project
from .selector import DEFAULT_VENDOR_MARKERS, is_vendored, select_source_files

__all__ = [
    "ABORT",
    "DEFAULT_VENDOR_MARKERS",
    "PARSE_ERROR_POLICIES",
    "REACT_MARKER",
    "SKIP",
    "analyze_project",
    "classify_source_file",
    "is_vendored",
    "select_source_files",
]
