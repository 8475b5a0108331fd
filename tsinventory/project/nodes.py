"""Typed top-level declaration nodes extracted from a parsed source file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class InitializerKind(str, Enum):
    """Syntactic kind of a variable initializer expression."""

    ARROW_FUNCTION = "ArrowFunction"
    JSX_ELEMENT = "JsxElement"
    OTHER = "Other"


@dataclass(frozen=True)
class Initializer:
    """Expression bound to a variable declarator."""

    kind: InitializerKind
    node_type: str
    text: str


@dataclass(frozen=True)
class FunctionDecl:
    name: Optional[str]
    text: str


@dataclass(frozen=True)
class VariableDecl:
    name: Optional[str]
    text: str
    initializer: Optional[Initializer] = None


@dataclass(frozen=True)
class ClassDecl:
    name: Optional[str]
    text: str


@dataclass(frozen=True)
class InterfaceDecl:
    name: Optional[str]
    text: str


@dataclass(frozen=True)
class EnumDecl:
    name: Optional[str]
    text: str


@dataclass(frozen=True)
class TypeAliasDecl:
    name: Optional[str]
    text: str


Declaration = Union[
    FunctionDecl, VariableDecl, ClassDecl, InterfaceDecl, EnumDecl, TypeAliasDecl
]


__all__ = [
    "ClassDecl",
    "Declaration",
    "EnumDecl",
    "FunctionDecl",
    "Initializer",
    "InitializerKind",
    "InterfaceDecl",
    "TypeAliasDecl",
    "VariableDecl",
]
