"""Reading tsconfig.json and resolving the project's input file set."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set

import json5
import pathspec

from ..errors import ProjectError
from ..logging import get_logger
from .parser import JAVASCRIPT_SUFFIXES, TYPESCRIPT_SUFFIXES

logger = get_logger("project.tsconfig")

DEFAULT_INCLUDE = ("**/*",)
DEFAULT_EXCLUDE = ("node_modules", "bower_components", "jspm_packages")

# Directories never entered by wildcard expansion unless an include names them.
_IMPLICIT_SKIP_DIRS = {"node_modules", "bower_components", "jspm_packages"}
_ALWAYS_SKIP_DIRS = {".git", ".hg", ".svn"}
_MAX_EXTENDS_DEPTH = 16


@dataclass
class TsConfig:
    """Effective input settings of a tsconfig.json after ``extends`` merging.

    ``files``, ``include`` and ``exclude`` are POSIX paths relative to
    ``base_dir``; ``None`` means the setting was not given anywhere in the chain.
    """

    base_dir: Path
    path: Optional[Path] = None
    files: Optional[List[str]] = None
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    compiler_options: Dict[str, Any] = field(default_factory=dict)

    @property
    def allow_js(self) -> bool:
        return self.compiler_options.get("allowJs") is True

    @property
    def out_dir(self) -> Optional[str]:
        value = self.compiler_options.get("outDir")
        return value if isinstance(value, str) else None

    def suffixes(self) -> tuple[str, ...]:
        if self.allow_js:
            return TYPESCRIPT_SUFFIXES + JAVASCRIPT_SUFFIXES
        return TYPESCRIPT_SUFFIXES

    def effective_include(self) -> List[str]:
        if self.include is not None:
            return list(self.include)
        if self.files is not None:
            # An explicit ``files`` list without ``include`` means nothing else.
            return []
        return list(DEFAULT_INCLUDE)

    def effective_exclude(self) -> List[str]:
        if self.exclude is not None:
            return list(self.exclude)
        patterns = list(DEFAULT_EXCLUDE)
        if self.out_dir:
            patterns.append(self.out_dir)
        return patterns


def load_tsconfig(path: Path) -> TsConfig:
    """Load ``path`` and every config it extends into one effective config."""
    config_path = path.expanduser().resolve()
    if not config_path.is_file():
        raise ProjectError(f"tsconfig file not found: {path}")
    return _load_chain(config_path, base_dir=config_path.parent, seen=set())


def iter_input_files(config: TsConfig) -> Iterator[Path]:
    """Yield the project's input files: ``files`` entries first, then the walk.

    Walk order is sorted by path so repeated loads of an unchanged tree yield the
    same order.
    """
    root = config.base_dir
    suffixes = config.suffixes()
    emitted: Set[str] = set()

    for entry in config.files or []:
        candidate = (root / entry).resolve()
        if not candidate.is_file():
            raise ProjectError(f"File '{entry}' listed in tsconfig 'files' not found")
        key = candidate.as_posix()
        if key not in emitted:
            emitted.add(key)
            yield candidate

    include = config.effective_include()
    if not include:
        return
    include_spec = _compile(include)
    exclude_spec = _compile(config.effective_exclude())
    explicit_dirs = _explicitly_named_dirs(include)

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix() if current != root else ""

        kept: List[str] = []
        for name in sorted(dirnames):
            if name in _ALWAYS_SKIP_DIRS:
                continue
            if name in _IMPLICIT_SKIP_DIRS and name not in explicit_dirs:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if exclude_spec.match_file(rel_path):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            if not _has_suffix(filename, suffixes):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if not include_spec.match_file(rel_path):
                continue
            if exclude_spec.match_file(rel_path):
                continue
            candidate = current / filename
            key = candidate.as_posix()
            if key in emitted:
                continue
            emitted.add(key)
            yield candidate


def _load_chain(config_path: Path, *, base_dir: Path, seen: Set[Path]) -> TsConfig:
    if config_path in seen:
        raise ProjectError(f"Circular 'extends' in {config_path}")
    if len(seen) >= _MAX_EXTENDS_DEPTH:
        raise ProjectError(f"'extends' chain too deep at {config_path}")
    seen.add(config_path)

    data = _read_json(config_path)
    config_dir = config_path.parent

    parent: Optional[TsConfig] = None
    extends = data.get("extends")
    for target in _as_extends_list(extends, config_path):
        resolved = _resolve_extends(target, config_dir)
        if resolved is None:
            logger.warning(
                "Ignoring unresolved 'extends' target %r in %s", target, config_path
            )
            continue
        base = _load_chain(resolved, base_dir=base_dir, seen=seen)
        parent = base if parent is None else _merge(parent, base)

    own = TsConfig(
        base_dir=base_dir,
        path=config_path,
        files=_relative_patterns(data, "files", config_dir, base_dir, config_path),
        include=_relative_patterns(data, "include", config_dir, base_dir, config_path),
        exclude=_relative_patterns(data, "exclude", config_dir, base_dir, config_path),
        compiler_options=_compiler_options(data, config_dir, base_dir, config_path),
    )
    if parent is None:
        return own
    return _merge(parent, own)


def _merge(base: TsConfig, override: TsConfig) -> TsConfig:
    options = dict(base.compiler_options)
    options.update(override.compiler_options)
    return TsConfig(
        base_dir=override.base_dir,
        path=override.path,
        files=override.files if override.files is not None else base.files,
        include=override.include if override.include is not None else base.include,
        exclude=override.exclude if override.exclude is not None else base.exclude,
        compiler_options=options,
    )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectError(f"Unable to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = json5.loads(text)
    except ValueError as exc:
        raise ProjectError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ProjectError(f"{path.name} must contain a JSON object at the root")
    return loaded


def _as_extends_list(value: Any, config_path: Path) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ProjectError(f"'extends' in {config_path} must be a string or list of strings")


def _resolve_extends(target: str, config_dir: Path) -> Optional[Path]:
    if target.startswith((".", "/")) or os.path.isabs(target):
        candidates = [config_dir / target]
    else:
        # Package specifier: only look in node_modules next to or above the config.
        candidates = [
            directory / "node_modules" / target
            for directory in (config_dir, *config_dir.parents)
        ]
    for candidate in candidates:
        for option in (candidate, candidate.with_name(candidate.name + ".json")):
            if option.is_file():
                return option.resolve()
        if candidate.is_dir() and (candidate / "tsconfig.json").is_file():
            return (candidate / "tsconfig.json").resolve()
    return None


def _relative_patterns(
    data: Dict[str, Any],
    key: str,
    config_dir: Path,
    base_dir: Path,
    config_path: Path,
) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ProjectError(f"'{key}' in {config_path} must be a list of strings")
    return [_rebase(item, config_dir, base_dir) for item in value]


def _compiler_options(
    data: Dict[str, Any], config_dir: Path, base_dir: Path, config_path: Path
) -> Dict[str, Any]:
    options = data.get("compilerOptions")
    if options is None:
        return {}
    if not isinstance(options, dict):
        raise ProjectError(f"'compilerOptions' in {config_path} must be an object")
    result = dict(options)
    out_dir = result.get("outDir")
    if isinstance(out_dir, str):
        result["outDir"] = _rebase(out_dir, config_dir, base_dir)
    return result


def _rebase(pattern: str, config_dir: Path, base_dir: Path) -> str:
    """Express ``pattern`` (relative to ``config_dir``) relative to ``base_dir``."""
    joined = posixpath.normpath(posixpath.join(config_dir.as_posix(), pattern))
    relative = posixpath.relpath(joined, base_dir.as_posix())
    return "**" if relative == "." else relative


def _compile(patterns: Sequence[str]) -> pathspec.PathSpec:
    anchored = []
    for pattern in patterns:
        if not pattern or pattern.startswith(".."):
            # Outside the walked tree.
            continue
        if pattern.startswith("./"):
            pattern = pattern[2:]
        anchored.append("/" + pattern.lstrip("/"))
    return pathspec.PathSpec.from_lines("gitignore", anchored)


def _explicitly_named_dirs(patterns: Sequence[str]) -> Set[str]:
    names: Set[str] = set()
    for pattern in patterns:
        names.update(part for part in pattern.split("/") if part in _IMPLICIT_SKIP_DIRS)
    return names


def _has_suffix(filename: str, suffixes: Sequence[str]) -> bool:
    lower = filename.lower()
    return any(lower.endswith(suffix) for suffix in suffixes)


__all__ = [
    "DEFAULT_EXCLUDE",
    "DEFAULT_INCLUDE",
    "TsConfig",
    "iter_input_files",
    "load_tsconfig",
]
