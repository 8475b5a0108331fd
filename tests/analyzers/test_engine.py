"""Tests for project-level analysis."""

from __future__ import annotations

import logging

import pytest

from tsinventory.analyzers.engine import analyze_project
from tsinventory.errors import AnalysisError
from tsinventory.models import AnalysisResult, FileAnalysis, assemble
from tsinventory.project import Project, SourceFile
from tests._fixtures.repo_builder import RepoBuilder


def _project(files: dict[str, str]) -> Project:
    return Project(
        root="/repo",
        source_files=[SourceFile.from_text(path, text) for path, text in files.items()],
    )


def test_vendored_file_is_excluded_from_result() -> None:
    project = _project(
        {
            "/repo/node_modules/lib/index.ts": "export function vendored() {}",
            "/repo/src/app.ts": "export function app() {}",
        }
    )

    result = analyze_project(project)

    assert [analysis.file_path for analysis in result.files] == ["/repo/src/app.ts"]
    assert [record.name for record in result.files[0].functions] == ["app"]


def test_empty_project_yields_empty_result() -> None:
    assert analyze_project(Project(root="/repo")) == AnalysisResult(files=[])


def test_result_preserves_selection_order_with_workers() -> None:
    files = {f"/repo/src/file{index:02d}.ts": f"function f{index}() {{}}" for index in range(20)}

    sequential = analyze_project(_project(files))
    parallel = analyze_project(_project(files), workers=4)

    assert [a.file_path for a in parallel.files] == list(files)
    assert parallel == sequential


def test_grammar_gap_inside_declaration_does_not_abort() -> None:
    project = _project(
        {
            "/repo/src/a.ts": "function foo(){}",
            "/repo/src/b.ts": "export interface Box<in out T> { v: T }",
        }
    )

    result = analyze_project(project)

    assert [analysis.file_path for analysis in result.files] == ["/repo/src/a.ts", "/repo/src/b.ts"]
    assert [record.name for record in result.files[1].interfaces] == ["Box"]


def test_abort_policy_raises_for_first_failing_file() -> None:
    project = _project(
        {
            "/repo/src/ok.ts": "const a = 1;",
            "/repo/src/broken.ts": "function (",
            "/repo/src/also-broken.ts": "class {",
        }
    )

    with pytest.raises(AnalysisError) as excinfo:
        analyze_project(project)

    assert excinfo.value.path == "/repo/src/broken.ts"


def test_abort_policy_with_workers_reports_first_file_in_order() -> None:
    project = _project(
        {
            "/repo/src/ok.ts": "const a = 1;",
            "/repo/src/broken.ts": "function (",
            "/repo/src/also-broken.ts": "class {",
        }
    )

    with pytest.raises(AnalysisError) as excinfo:
        analyze_project(project, workers=3)

    assert excinfo.value.path == "/repo/src/broken.ts"


def test_skip_policy_omits_failing_files(caplog: pytest.LogCaptureFixture) -> None:
    project = _project(
        {
            "/repo/src/ok.ts": "function ok() {}",
            "/repo/src/broken.ts": "function (",
        }
    )
    logger = logging.getLogger("tsinventory")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.WARNING, logger="tsinventory"):
            result = analyze_project(project, on_parse_error="skip")
    finally:
        logger.removeHandler(caplog.handler)

    assert [analysis.file_path for analysis in result.files] == ["/repo/src/ok.ts"]
    assert any("/repo/src/broken.ts" in message for message in caplog.messages)


def test_unknown_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        analyze_project(Project(root="/repo"), on_parse_error="retry")


def test_file_paths_are_unique_per_result(repo_builder: RepoBuilder) -> None:
    repo_builder.write_tsconfig({"files": ["src/a.ts"], "include": ["src"]})
    repo_builder.write({"src/a.ts": "function a() {}", "src/b.ts": "function b() {}"})

    result = analyze_project(repo_builder.load())

    paths = [analysis.file_path for analysis in result.files]
    assert paths == [repo_builder.file_path("src/a.ts"), repo_builder.file_path("src/b.ts")]
    assert len(set(paths)) == len(paths)


def test_end_to_end_project_on_disk(repo_builder: RepoBuilder) -> None:
    repo_builder.write_tsconfig({"compilerOptions": {"jsx": "react"}})
    repo_builder.write(
        {
            "src/components/Button.tsx": """
            import React from "react";

            export interface ButtonProps {
              label: string;
            }

            export const Button = (props: ButtonProps) => React.createElement("button", null, props.label);

            export const Icon = <svg />;
            """,
            "src/state.ts": """
            export enum Status {
              Idle,
              Busy,
            }

            export type Listener = (status: Status) => void;

            export class Store {
              status = Status.Idle;
            }

            export function createStore(): Store {
              return new Store();
            }
            """,
        }
    )

    result = analyze_project(repo_builder.load())
    state, button = result.files

    assert button.file_path == repo_builder.file_path("src/components/Button.tsx")
    assert [r.name for r in button.interfaces] == ["ButtonProps"]
    assert [r.name for r in button.arrow_functions] == ["Button"]
    assert [r.name for r in button.react_components] == ["Button", "Icon"]
    assert button.react_components[1].source_text == "<svg />"

    assert [r.name for r in state.enums] == ["Status"]
    assert [r.name for r in state.type_aliases] == ["Listener"]
    assert [r.name for r in state.classes] == ["Store"]
    assert [r.name for r in state.functions] == ["createStore"]
    assert state.functions[0].source_text.startswith("export function createStore(): Store {")


def test_assemble_keeps_order_without_merging() -> None:
    first = FileAnalysis(file_path="/repo/b.ts")
    second = FileAnalysis(file_path="/repo/a.ts")

    result = assemble([first, second])

    assert result.files == [first, second]
