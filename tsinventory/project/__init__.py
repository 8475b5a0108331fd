"""Project/AST provider: parsed TypeScript and JavaScript source trees."""

from .loader import Project, SourceFile, load_project
from .nodes import (
    ClassDecl,
    Declaration,
    EnumDecl,
    FunctionDecl,
    Initializer,
    InitializerKind,
    InterfaceDecl,
    TypeAliasDecl,
    VariableDecl,
)
from .tsconfig import TsConfig, load_tsconfig

__all__ = [
    "ClassDecl",
    "Declaration",
    "EnumDecl",
    "FunctionDecl",
    "Initializer",
    "InitializerKind",
    "InterfaceDecl",
    "Project",
    "SourceFile",
    "TsConfig",
    "TypeAliasDecl",
    "VariableDecl",
    "load_project",
    "load_tsconfig",
]
