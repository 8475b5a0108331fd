"""Configuration loading for tsinventory (.tsinventory.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers.engine import ABORT, PARSE_ERROR_POLICIES
from .analyzers.selector import DEFAULT_VENDOR_MARKERS
from .errors import ConfigError

CONFIG_FILENAME = ".tsinventory.yml"


@dataclass
class AnalysisConfig:
    """Engine settings: file selection, failure policy and fan-out."""

    vendor_markers: List[str] = field(default_factory=lambda: list(DEFAULT_VENDOR_MARKERS))
    on_parse_error: str = ABORT
    workers: int = 1
    require_tsconfig: bool = True
    tsconfig: str = "tsconfig.json"


@dataclass
class CloneConfig:
    """Settings for fetching remote repositories."""

    depth: Optional[int] = 1
    timeout: Optional[float] = 300.0


@dataclass
class ServiceConfig:
    """HTTP service bind settings."""

    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class InventoryConfig:
    """Represents the settings defined in .tsinventory.yml."""

    root: Path
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    clone: CloneConfig = field(default_factory=CloneConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(config_path: Path) -> InventoryConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return InventoryConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        if "vendor_markers" in analysis_data:
            analysis.vendor_markers = _as_str_list(analysis_data.get("vendor_markers"))
        policy = _as_str(analysis_data.get("on_parse_error"))
        if policy is not None:
            policy = policy.strip().lower()
            if policy not in PARSE_ERROR_POLICIES:
                raise ConfigError(
                    f"analysis.on_parse_error must be one of "
                    f"{', '.join(PARSE_ERROR_POLICIES)}; got {policy!r}"
                )
            analysis.on_parse_error = policy
        workers = _as_int(analysis_data.get("workers"))
        if workers is not None:
            if workers < 1:
                raise ConfigError("analysis.workers must be a positive integer")
            analysis.workers = workers
        require = _as_bool(analysis_data.get("require_tsconfig"))
        if require is not None:
            analysis.require_tsconfig = require
        tsconfig = _as_str(analysis_data.get("tsconfig"))
        if tsconfig:
            analysis.tsconfig = tsconfig

    clone = CloneConfig()
    clone_data = _as_dict(data.get("clone"))
    if clone_data:
        if "depth" in clone_data:
            clone.depth = _as_int(clone_data.get("depth"))
        if "timeout" in clone_data:
            clone.timeout = _as_float(clone_data.get("timeout"))

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"))
    if service_data:
        host = _as_str(service_data.get("host"))
        if host:
            service.host = host
        port = _as_int(service_data.get("port"))
        if port is not None:
            service.port = port

    return InventoryConfig(root=root, analysis=analysis, clone=clone, service=service)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "CloneConfig",
    "ConfigError",
    "InventoryConfig",
    "ServiceConfig",
    "load_config",
]
