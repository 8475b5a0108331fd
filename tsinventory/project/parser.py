"""Tree-sitter powered extraction of top-level declarations."""

from __future__ import annotations

import threading
from pathlib import PurePosixPath
from typing import Dict, Iterator, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..errors import SourceParseError
from ..logging import get_logger
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

_TYPESCRIPT = "typescript"
_TSX = "tsx"

TYPESCRIPT_SUFFIXES = (".ts", ".tsx", ".mts", ".cts")
JAVASCRIPT_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")

_GRAMMAR_BY_SUFFIX = {
    ".ts": _TYPESCRIPT,
    ".mts": _TYPESCRIPT,
    ".cts": _TYPESCRIPT,
    ".tsx": _TSX,
    ".js": _TSX,
    ".jsx": _TSX,
    ".mjs": _TSX,
    ".cjs": _TSX,
}

_FUNCTION_TYPES = {"function_declaration", "generator_function_declaration"}
_ANONYMOUS_FUNCTION_TYPES = {"function_expression", "function", "generator_function"}
_CLASS_TYPES = {"class_declaration", "abstract_class_declaration"}
_VARIABLE_STATEMENT_TYPES = {"lexical_declaration", "variable_declaration"}
_JSX_TYPES = {"jsx_element", "jsx_self_closing_element"}
_WRAPPER_TYPES = {"export_statement", "ambient_declaration"}

logger = get_logger("project.parser")

_LANGUAGES: Dict[str, Language] = {}
_LANGUAGE_LOCK = threading.Lock()
# tree-sitter parsers are not safe to share between threads.
_local = threading.local()


def grammar_for_path(path: str) -> Optional[str]:
    """Return the grammar key used to parse ``path`` or None when unsupported."""
    return _GRAMMAR_BY_SUFFIX.get(PurePosixPath(path).suffix.lower())


def parse_declarations(path: str, source: bytes) -> Tuple[Declaration, ...]:
    """Parse ``source`` and return its top-level declarations in source order.

    Raises :class:`SourceParseError` when the file type is unsupported or the
    syntax error breaks the top-level structure. Recovered errors nested inside
    a declaration (grammar gaps such as variance annotations) are tolerated.
    """
    grammar = grammar_for_path(path)
    if grammar is None:
        raise SourceParseError(path, "unsupported file extension")

    tree = _get_parser(grammar).parse(source)
    root = tree.root_node
    if root.has_error:
        line = _structural_error_line(root)
        if line is not None:
            raise SourceParseError(path, f"syntax error near line {line}")
        logger.debug("Tolerating nested syntax errors in %s", path)

    return tuple(_DeclarationCollector(source).collect(root))


def _get_language(key: str) -> Language:
    with _LANGUAGE_LOCK:
        language = _LANGUAGES.get(key)
        if language is None:
            if key == _TSX:
                language = Language(tree_sitter_typescript.language_tsx())
            else:
                language = Language(tree_sitter_typescript.language_typescript())
            _LANGUAGES[key] = language
    return language


def _get_parser(key: str) -> Parser:
    parsers: Optional[Dict[str, Parser]] = getattr(_local, "parsers", None)
    if parsers is None:
        parsers = {}
        _local.parsers = parsers
    parser = parsers.get(key)
    if parser is None:
        parser = Parser(_get_language(key))
        parsers[key] = parser
    return parser


def _is_broken(node: Node) -> bool:
    return node.type == "ERROR" or node.is_missing


def _structural_error_line(root: Node) -> Optional[int]:
    """Line of the first error that damages top-level structure, if any.

    Damage means an ERROR or MISSING statement at the top level (looking through
    export/declare wrappers), or a MISSING token anywhere in the tree.
    """
    if _is_broken(root):
        return root.start_point[0] + 1
    for statement in root.children:
        if _is_broken(statement):
            return statement.start_point[0] + 1
        if statement.type in _WRAPPER_TYPES:
            for child in statement.children:
                if _is_broken(child):
                    return child.start_point[0] + 1

    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            return node.start_point[0] + 1
        broken = [child for child in node.children if child.has_error or child.is_missing]
        stack.extend(reversed(broken))
    return None


class _DeclarationCollector:
    """Walks the program node and maps statements onto typed declarations."""

    def __init__(self, source: bytes) -> None:
        self._source = source

    def collect(self, root: Node) -> Iterator[Declaration]:
        for statement in root.named_children:
            yield from self._visit(statement, statement)

    def _visit(self, node: Node, outer: Node) -> Iterator[Declaration]:
        # ``outer`` is the statement node whose span becomes the declaration text,
        # so export/declare modifiers stay part of it.
        kind = node.type
        if kind == "export_statement":
            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                yield from self._visit(declaration, outer)
                return
            value = node.child_by_field_name("value")
            if value is None:
                return
            if value.type in _ANONYMOUS_FUNCTION_TYPES:
                yield FunctionDecl(name=self._name(value), text=self._text(outer))
            elif value.type == "class":
                yield ClassDecl(name=self._name(value), text=self._text(outer))
            return

        if kind == "ambient_declaration":
            for child in node.named_children:
                if child.type == "function_signature":
                    yield FunctionDecl(name=self._name(child), text=self._text(outer))
                else:
                    yield from self._visit(child, outer)
            return

        if kind in _FUNCTION_TYPES:
            yield FunctionDecl(name=self._name(node), text=self._text(outer))
        elif kind in _CLASS_TYPES:
            yield ClassDecl(name=self._name(node), text=self._text(outer))
        elif kind == "interface_declaration":
            yield InterfaceDecl(name=self._name(node), text=self._text(outer))
        elif kind == "enum_declaration":
            yield EnumDecl(name=self._name(node), text=self._text(outer))
        elif kind == "type_alias_declaration":
            yield TypeAliasDecl(name=self._name(node), text=self._text(outer))
        elif kind in _VARIABLE_STATEMENT_TYPES:
            for declarator in node.named_children:
                if declarator.type == "variable_declarator":
                    yield self._variable(declarator)

    def _variable(self, declarator: Node) -> VariableDecl:
        value = declarator.child_by_field_name("value")
        initializer = None
        if value is not None:
            initializer = Initializer(
                kind=_initializer_kind(value),
                node_type=value.type,
                text=self._text(value),
            )
        return VariableDecl(
            name=self._name(declarator),
            text=self._text(declarator),
            initializer=initializer,
        )

    def _name(self, node: Node) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        return self._text(name_node)

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")


def _initializer_kind(node: Node) -> InitializerKind:
    if node.type == "arrow_function":
        return InitializerKind.ARROW_FUNCTION
    if node.type in _JSX_TYPES:
        return InitializerKind.JSX_ELEMENT
    return InitializerKind.OTHER


__all__ = [
    "JAVASCRIPT_SUFFIXES",
    "TYPESCRIPT_SUFFIXES",
    "grammar_for_path",
    "parse_declarations",
]
