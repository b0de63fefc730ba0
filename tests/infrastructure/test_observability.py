"""Tests for JSONFormatter and setup_logging."""

import json
import logging

from users_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "users_api.test", logging.INFO, __file__, 1, "GET /users 200", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "users_api.test"
    assert log["message"] == "GET /users 200"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(method="GET", status_code=200, duration_ms=1.5, secret="x"),
    ))
    assert log["method"] == "GET"
    assert log["status_code"] == 200
    assert log["duration_ms"] == 1.5
    assert "secret" not in log


def test_setup_logging_does_not_stack_handlers():
    original = list(logging.root.handlers)
    original_level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        ours = [h for h in logging.root.handlers if h.get_name() == "users_api"]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        for handler in list(logging.root.handlers):
            if handler not in original:
                logging.root.removeHandler(handler)
        logging.root.setLevel(original_level)
