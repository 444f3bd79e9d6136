"""Tests for the structlog-backed logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from kb_common.logging import bound_run, configure_logging


pytestmark = pytest.mark.unit_common


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_file_logging(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_logger
) -> None:
    log_file = tmp_path / "kb.log"
    monkeypatch.setenv("KB_LOG_JSON", "1")
    configure_logging(level="DEBUG", log_file=str(log_file), force=True)

    logging.getLogger("kb.test").info("scan finished")

    line = log_file.read_text().strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "scan finished"
    assert payload["level"] == "info"
    assert "timestamp" in payload


def test_env_level_is_used_when_not_explicit(
    monkeypatch: pytest.MonkeyPatch, restore_root_logger
) -> None:
    monkeypatch.setenv("KB_LOG_LEVEL", "warning")
    configure_logging(force=True)
    assert restore_root_logger.level == logging.WARNING


def test_debug_flag_wins(monkeypatch: pytest.MonkeyPatch, restore_root_logger) -> None:
    monkeypatch.setenv("KB_LOG_LEVEL", "ERROR")
    configure_logging(debug=True, force=True)
    assert restore_root_logger.level == logging.DEBUG


def test_existing_handlers_are_kept_without_force(restore_root_logger) -> None:
    sentinel = logging.NullHandler()
    restore_root_logger.addHandler(sentinel)
    configure_logging()
    assert sentinel in restore_root_logger.handlers
    restore_root_logger.removeHandler(sentinel)


def test_bound_run_tags_records(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_logger
) -> None:
    log_file = tmp_path / "kb.log"
    monkeypatch.delenv("KB_LOG_LEVEL", raising=False)
    configure_logging(json=True, log_file=str(log_file), force=True)

    log = logging.getLogger("kb.test")
    with bound_run("run-20260101-000000"):
        log.info("inside")
    log.info("outside")

    inside, outside = [json.loads(line) for line in log_file.read_text().splitlines()[-2:]]
    assert inside["run_id"] == "run-20260101-000000"
    assert "run_id" not in outside


def test_numeric_level_strings(restore_root_logger) -> None:
    configure_logging(level="30", force=True)
    assert restore_root_logger.level == logging.WARNING
