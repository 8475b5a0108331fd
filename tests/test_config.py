"""Tests for tsinventory.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsinventory.config import ConfigError, InventoryConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, InventoryConfig)
    assert config.root == tmp_path.resolve()
    assert config.analysis.vendor_markers == ["node_modules"]
    assert config.analysis.on_parse_error == "abort"
    assert config.analysis.workers == 1
    assert config.analysis.require_tsconfig is True
    assert config.analysis.tsconfig == "tsconfig.json"
    assert config.clone.depth == 1
    assert config.clone.timeout == pytest.approx(300.0)
    assert config.service.host == "127.0.0.1"
    assert config.service.port == 3000


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".tsinventory.yml"
    config_file.write_text(
        """
analysis:
  vendor_markers:
    - node_modules
    - vendor/
  on_parse_error: Skip
  workers: 4
  require_tsconfig: false
  tsconfig: tsconfig.app.json
clone:
  depth: 0
  timeout: 30
service:
  host: 0.0.0.0
  port: 8080
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.analysis.vendor_markers == ["node_modules", "vendor/"]
    assert config.analysis.on_parse_error == "skip"
    assert config.analysis.workers == 4
    assert config.analysis.require_tsconfig is False
    assert config.analysis.tsconfig == "tsconfig.app.json"
    assert config.clone.depth == 0
    assert config.clone.timeout == pytest.approx(30.0)
    assert config.service.host == "0.0.0.0"
    assert config.service.port == 8080


def test_load_config_accepts_directory(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text("analysis:\n  workers: 2\n", encoding="utf-8")

    assert load_config(tmp_path).analysis.workers == 2


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).analysis.on_parse_error == "abort"


def test_invalid_policy_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text(
        "analysis:\n  on_parse_error: retry\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_positive_workers_rejected(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text("analysis:\n  workers: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text("analysis: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".tsinventory.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
