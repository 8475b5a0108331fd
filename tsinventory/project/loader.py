"""Project and source-file handles built over a local source tree."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Type, TypeVar

from ..errors import ProjectError, SourceParseError
from ..logging import get_logger
from .nodes import (
    ClassDecl,
    Declaration,
    EnumDecl,
    FunctionDecl,
    InterfaceDecl,
    TypeAliasDecl,
    VariableDecl,
)
from .parser import parse_declarations
from .tsconfig import TsConfig, iter_input_files, load_tsconfig

logger = get_logger("project")

_D = TypeVar("_D")


class SourceFile:
    """Read-only handle over one file; parsed lazily on first access."""

    def __init__(self, path: str, source: Optional[bytes] = None) -> None:
        self._path = path
        self._source = source
        self._declarations: Optional[Tuple[Declaration, ...]] = None

    @classmethod
    def from_text(cls, path: str, text: str) -> "SourceFile":
        return cls(path, source=text.encode("utf-8"))

    @property
    def path(self) -> str:
        return self._path

    @property
    def declarations(self) -> Tuple[Declaration, ...]:
        """Top-level declarations in source order.

        Raises :class:`SourceParseError` when the file is unreadable, not UTF-8
        or does not parse cleanly.
        """
        if self._declarations is None:
            self._declarations = parse_declarations(self._path, self._read())
        return self._declarations

    @property
    def functions(self) -> Tuple[FunctionDecl, ...]:
        return self._of_type(FunctionDecl)

    @property
    def variables(self) -> Tuple[VariableDecl, ...]:
        return self._of_type(VariableDecl)

    @property
    def classes(self) -> Tuple[ClassDecl, ...]:
        return self._of_type(ClassDecl)

    @property
    def interfaces(self) -> Tuple[InterfaceDecl, ...]:
        return self._of_type(InterfaceDecl)

    @property
    def enums(self) -> Tuple[EnumDecl, ...]:
        return self._of_type(EnumDecl)

    @property
    def type_aliases(self) -> Tuple[TypeAliasDecl, ...]:
        return self._of_type(TypeAliasDecl)

    def _of_type(self, kind: Type[_D]) -> Tuple[_D, ...]:
        return tuple(decl for decl in self.declarations if isinstance(decl, kind))

    def _read(self) -> bytes:
        if self._source is not None:
            data = self._source
        else:
            try:
                data = Path(self._path).read_bytes()
            except OSError as exc:
                raise SourceParseError(self._path, exc.strerror or str(exc)) from exc
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8) :]
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceParseError(self._path, "file is not valid UTF-8") from exc
        return data

    def __repr__(self) -> str:
        return f"SourceFile({self._path!r})"


@dataclass
class Project:
    """Ordered source files of one project plus the config that selected them."""

    root: str
    source_files: List[SourceFile] = field(default_factory=list)
    config: Optional[TsConfig] = None


def load_project(
    root: str | Path,
    *,
    tsconfig: str = "tsconfig.json",
    require_tsconfig: bool = True,
) -> Project:
    """Build a :class:`Project` for the tree at ``root``.

    ``tsconfig`` is resolved relative to ``root``. When it is missing and
    ``require_tsconfig`` is true a :class:`ProjectError` is raised; otherwise
    the compiler defaults apply.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise ProjectError(f"Project path not found: {root}")
    if not root_path.is_dir():
        raise ProjectError(f"Project path is not a directory: {root}")

    config_path = root_path / tsconfig
    if config_path.is_file():
        config = load_tsconfig(config_path)
        logger.debug("Loaded compiler configuration from %s", config_path)
    elif require_tsconfig:
        raise ProjectError(f"{tsconfig} not found in {root_path}")
    else:
        logger.debug("No %s in %s; using compiler defaults", tsconfig, root_path)
        config = TsConfig(base_dir=root_path)

    files = [SourceFile(path.as_posix()) for path in iter_input_files(config)]
    logger.debug("Project at %s has %d source files", root_path, len(files))
    return Project(root=root_path.as_posix(), source_files=files, config=config)


__all__ = ["Project", "SourceFile", "load_project"]
