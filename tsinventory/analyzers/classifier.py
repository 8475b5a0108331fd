"""Classification of a file's top-level declarations into catalog categories."""

from __future__ import annotations

from ..models import DeclarationRecord, FileAnalysis
from ..project import (
    ClassDecl,
    Declaration,
    EnumDecl,
    FunctionDecl,
    InitializerKind,
    InterfaceDecl,
    SourceFile,
    TypeAliasDecl,
    VariableDecl,
)

REACT_MARKER = "React."


def is_arrow_function(variable: VariableDecl) -> bool:
    initializer = variable.initializer
    return initializer is not None and initializer.kind is InitializerKind.ARROW_FUNCTION


def is_react_component(variable: VariableDecl) -> bool:
    """Heuristic: JSX initializer, or initializer text mentioning ``React.``.

    The text check is purely textual, so a string literal containing the marker
    also counts.
    """
    initializer = variable.initializer
    if initializer is None:
        return False
    return initializer.kind is InitializerKind.JSX_ELEMENT or REACT_MARKER in initializer.text


def classify_source_file(source_file: SourceFile) -> FileAnalysis:
    """Build the per-category catalog for one file.

    Parse failures on the handle propagate unchanged; no partial analysis is
    returned. A variable can land in both ``arrow_functions`` and
    ``react_components``.
    """
    declarations = source_file.declarations
    analysis = FileAnalysis(file_path=source_file.path)
    for declaration in declarations:
        _classify(declaration, analysis)
    return analysis


def _classify(declaration: Declaration, analysis: FileAnalysis) -> None:
    if isinstance(declaration, FunctionDecl):
        analysis.functions.append(_record(declaration.name, declaration.text))
    elif isinstance(declaration, VariableDecl):
        initializer = declaration.initializer
        if initializer is None:
            return
        if is_arrow_function(declaration):
            analysis.arrow_functions.append(_record(declaration.name, initializer.text))
        if is_react_component(declaration):
            analysis.react_components.append(_record(declaration.name, initializer.text))
    elif isinstance(declaration, ClassDecl):
        analysis.classes.append(_record(declaration.name, declaration.text))
    elif isinstance(declaration, InterfaceDecl):
        analysis.interfaces.append(_record(declaration.name, declaration.text))
    elif isinstance(declaration, EnumDecl):
        analysis.enums.append(_record(declaration.name, declaration.text))
    elif isinstance(declaration, TypeAliasDecl):
        analysis.type_aliases.append(_record(declaration.name, declaration.text))
    else:
        raise TypeError(f"Unsupported declaration node: {declaration!r}")


def _record(name: str | None, text: str) -> DeclarationRecord:
    return DeclarationRecord(name=name, source_text=text)


__all__ = [
    "REACT_MARKER",
    "classify_source_file",
    "is_arrow_function",
    "is_react_component",
]
