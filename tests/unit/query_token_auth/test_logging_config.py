"""Tests for logging configuration."""

import json
import logging

import pytest

from query_token_auth.logging_config import get_logger, log_with_context, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_console_only():
    """Test console logging without a log directory."""
    root = setup_logging("debug")

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_setup_logging_json_file(tmp_path):
    """Test JSON records are written to the rotating file."""
    setup_logging("INFO", log_dir=tmp_path)
    logger = get_logger("query_token_auth.test")

    log_with_context(logger, "info", "hello", event_type="test_event", parameter_name="access_token")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "query_token_auth.log").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "hello"
    assert record["event_type"] == "test_event"
    assert record["parameter_name"] == "access_token"


def test_log_with_context_passes_extra(caplog):
    """Test extra fields are attached to the log record."""
    logger = get_logger("query_token_auth.test")

    with caplog.at_level(logging.WARNING, logger="query_token_auth.test"):
        log_with_context(logger, "WARNING", "careful", event_type="auth_failure")

    assert caplog.records[-1].event_type == "auth_failure"
    assert caplog.records[-1].levelname == "WARNING"
