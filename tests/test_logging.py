from __future__ import annotations

import json
import logging

import pytest
import structlog

from reservation_admin.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    structlog.reset_defaults()


def test_file_gets_json_lines(tmp_path):
    log_file = tmp_path / "logs" / "cli.log"
    setup_logging(log_file, level="INFO")

    structlog.get_logger("reservation_admin.test").info("api_call", path="/events", status=200)
    logging.getLogger().handlers[-1].flush()

    line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert line["event"] == "api_call"
    assert line["level"] == "info"
    assert (line["path"], line["status"]) == ("/events", 200)
    assert "timestamp" in line


def test_default_level_is_warning(monkeypatch, tmp_path):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    log_file = tmp_path / "cli.log"
    setup_logging(log_file)

    logger = structlog.get_logger("reservation_admin.test")
    logger.info("hidden")
    logger.warning("shown")
    logging.getLogger().handlers[-1].flush()

    events = [json.loads(line)["event"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert events == ["shown"]
    assert logging.getLogger().level == logging.WARNING


def test_log_level_env_var_applies_without_explicit_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    setup_logging()
    assert logging.getLogger().level == logging.DEBUG


def test_stdout_stays_clean(capsys):
    setup_logging(level="INFO")
    structlog.get_logger("reservation_admin.test").info("api_call")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["event"] == "api_call"
