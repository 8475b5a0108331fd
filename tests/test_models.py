"""Tests for result models."""

from __future__ import annotations

from tsinventory.models import AnalysisResult, DeclarationRecord, FileAnalysis


def test_file_analysis_serialises_with_wire_keys() -> None:
    analysis = FileAnalysis(file_path="/repo/a.ts")
    analysis.type_aliases.append(DeclarationRecord(name="Id", source_text="type Id = string;"))

    payload = AnalysisResult(files=[analysis]).to_dict()

    assert list(payload["files"][0]) == [
        "filePath",
        "functions",
        "arrowFunctions",
        "reactComponents",
        "classes",
        "interfaces",
        "enums",
        "typeAliases",
    ]
    assert payload["files"][0]["typeAliases"] == [{"name": "Id", "sourceText": "type Id = string;"}]


def test_source_text_is_not_reformatted() -> None:
    text = "function  spaced ( )\r\n{\t}"
    record = DeclarationRecord(name="spaced", source_text=text)

    assert record.to_dict()["sourceText"] == text
