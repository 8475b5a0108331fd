"""Result data models produced by the declaration inventory."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

CATEGORY_FIELDS: Dict[str, str] = {
    "functions": "functions",
    "arrow_functions": "arrowFunctions",
    "react_components": "reactComponents",
    "classes": "classes",
    "interfaces": "interfaces",
    "enums": "enums",
    "type_aliases": "typeAliases",
}


@dataclass(frozen=True)
class DeclarationRecord:
    """Name and verbatim source text of one matched declaration."""

    name: Optional[str]
    source_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "sourceText": self.source_text}


@dataclass
class FileAnalysis:
    """Per-file catalog of top-level declarations, one list per category."""

    file_path: str
    functions: List[DeclarationRecord] = field(default_factory=list)
    arrow_functions: List[DeclarationRecord] = field(default_factory=list)
    react_components: List[DeclarationRecord] = field(default_factory=list)
    classes: List[DeclarationRecord] = field(default_factory=list)
    interfaces: List[DeclarationRecord] = field(default_factory=list)
    enums: List[DeclarationRecord] = field(default_factory=list)
    type_aliases: List[DeclarationRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"filePath": self.file_path}
        for attr, key in CATEGORY_FIELDS.items():
            payload[key] = [record.to_dict() for record in getattr(self, attr)]
        return payload


@dataclass
class AnalysisResult:
    """Ordered collection of file analyses for one project."""

    files: List[FileAnalysis] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"files": [analysis.to_dict() for analysis in self.files]}


def assemble(analyses: Sequence[FileAnalysis]) -> AnalysisResult:
    """Wrap per-file records into the final result, keeping their order."""
    return AnalysisResult(files=list(analyses))


__all__ = [
    "AnalysisResult",
    "CATEGORY_FIELDS",
    "DeclarationRecord",
    "FileAnalysis",
    "assemble",
]
