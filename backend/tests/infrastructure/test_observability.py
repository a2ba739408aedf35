"""Structured Logging — JSON formatter fields and idempotent setup.

Tests:
    - Standard fields always present
    - Known extras surfaced, unknown extras dropped
    - setup_logging twice installs a single handler
"""

import json
import logging

from libraryhub.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "libraryhub.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_standard_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "libraryhub.test"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload


def test_json_formatter_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(error_code="USER_NOT_FOUND", loan_id="L1", unrelated="x"),
    ))
    assert payload["error_code"] == "USER_NOT_FOUND"
    assert payload["loan_id"] == "L1"
    assert "unrelated" not in payload


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "libraryhub"]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(ours[0])
