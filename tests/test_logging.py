"""Tests for logging configuration."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from tsinventory.logging import configure_logging, get_logger, resolve_level


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("tsinventory")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_uses_package_hierarchy() -> None:
    assert get_logger().name == "tsinventory"
    assert get_logger("project.parser").name == "tsinventory.project.parser"


def test_verbose_wins_over_quiet() -> None:
    assert resolve_level() == logging.INFO
    assert resolve_level(quiet=True) == logging.WARNING
    assert resolve_level(verbose=True, quiet=True) == logging.DEBUG


def test_quiet_console_drops_info_messages() -> None:
    stream = io.StringIO()
    configure_logging(quiet=True, stream=stream)

    get_logger("engine").info("Selected 3 of 4 source files")
    get_logger("engine").warning("Skipping /repo/a.ts: syntax error near line 1")

    assert stream.getvalue() == "[tsinventory] WARNING Skipping /repo/a.ts: syntax error near line 1\n"


def test_verbose_console_names_the_module() -> None:
    stream = io.StringIO()
    configure_logging(verbose=True, stream=stream)

    get_logger("git.clone").debug("Cloning https://example.com/app.git")

    assert stream.getvalue() == (
        "[tsinventory] DEBUG tsinventory.git.clone: Cloning https://example.com/app.git\n"
    )


def test_log_file_records_debug_while_console_stays_quiet(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_file = tmp_path / "run.log"
    configure_logging(quiet=True, log_file=log_file, stream=stream)

    get_logger("orchestrator").debug("Project /repo loaded with 2 files")

    assert stream.getvalue() == ""
    assert "tsinventory.orchestrator [MainThread]: Project /repo loaded with 2 files" in (
        log_file.read_text(encoding="utf-8")
    )


def test_reconfiguring_does_not_duplicate_handlers() -> None:
    configure_logging(stream=io.StringIO())
    configure_logging(stream=io.StringIO())

    assert len(logging.getLogger("tsinventory").handlers) == 1
