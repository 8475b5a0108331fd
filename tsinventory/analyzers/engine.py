"""Project-level analysis: select files, classify each, assemble the result."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Sequence, Union

from ..errors import AnalysisError, SourceParseError
from ..logging import get_logger
from ..models import AnalysisResult, FileAnalysis, assemble
from ..project import Project, SourceFile
from .classifier import classify_source_file
from .selector import DEFAULT_VENDOR_MARKERS, select_source_files

ABORT = "abort"
SKIP = "skip"
PARSE_ERROR_POLICIES = (ABORT, SKIP)

logger = get_logger("engine")

_Outcome = Union[FileAnalysis, SourceParseError]


def analyze_project(
    project: Project,
    *,
    vendor_markers: Sequence[str] = DEFAULT_VENDOR_MARKERS,
    on_parse_error: str = ABORT,
    workers: int = 1,
) -> AnalysisResult:
    """Catalog the top-level declarations of every non-vendored file.

    ``on_parse_error`` applies uniformly to every file of the run: ``"abort"``
    raises :class:`AnalysisError` for the first failing file in selection
    order, ``"skip"`` logs and omits failing files. Results keep selection
    order even when ``workers`` > 1.
    """
    if on_parse_error not in PARSE_ERROR_POLICIES:
        raise ValueError(
            f"on_parse_error must be one of {', '.join(PARSE_ERROR_POLICIES)}; "
            f"got {on_parse_error!r}"
        )

    selected = select_source_files(project, vendor_markers)
    logger.debug(
        "Selected %d of %d source files", len(selected), len(project.source_files)
    )

    outcomes: Iterator[_Outcome]
    if workers > 1 and len(selected) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order regardless of completion order.
            outcomes = iter(list(executor.map(_classify_safely, selected)))
    else:
        outcomes = (_classify_safely(source_file) for source_file in selected)

    analyses: List[FileAnalysis] = []
    for source_file, outcome in zip(selected, outcomes):
        if isinstance(outcome, SourceParseError):
            if on_parse_error == ABORT:
                raise AnalysisError(source_file.path, str(outcome)) from outcome
            logger.warning("Skipping %s: %s", source_file.path, outcome.reason)
            continue
        analyses.append(outcome)

    return assemble(analyses)


def _classify_safely(source_file: SourceFile) -> _Outcome:
    try:
        return classify_source_file(source_file)
    except SourceParseError as exc:
        return exc


__all__ = ["ABORT", "PARSE_ERROR_POLICIES", "SKIP", "analyze_project"]
