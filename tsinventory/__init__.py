"""Inventory of top-level TypeScript/JavaScript declarations per file."""

from .analyzers import analyze_project, classify_source_file, select_source_files
from .models import AnalysisResult, DeclarationRecord, FileAnalysis, assemble
from .project import Project, SourceFile, load_project

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "DeclarationRecord",
    "FileAnalysis",
    "Project",
    "SourceFile",
    "analyze_project",
    "assemble",
    "classify_source_file",
    "load_project",
    "select_source_files",
]
