"""Unit tests for JSON logging."""

from __future__ import annotations

import json
import logging

from issue_announcer.announcer.logging import JsonFormatter


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord(
        name="issue_announcer.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


def test_json_formatter_lifts_file_and_recipient() -> None:
    record = _record("Skipping %s", "record")
    record.file = "broken.json"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "issue_announcer.test"
    assert payload["message"] == "Skipping record"
    assert payload["file"] == "broken.json"
    assert payload["recipient"] is None
    assert "extra" not in payload


def test_json_formatter_nests_other_extra_fields() -> None:
    record = _record("Notification delivery failed")
    record.recipient = "a@b.com"
    record.reason = "HTTP 401"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["recipient"] == "a@b.com"
    assert payload["file"] is None
    assert payload["extra"] == {"reason": "HTTP 401"}
