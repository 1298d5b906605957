"""Tests for request id context and the logging filter that reads it."""

import logging

from orderlookup.middleware.request_id import sanitize_request_id
from orderlookup.shared.context import get_request_id, reset_request_id, set_request_id
from orderlookup.shared.telemetry.logging import RequestIdFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)


def test_set_and_reset() -> None:
    assert get_request_id() is None
    token = set_request_id("req-1")
    assert get_request_id() == "req-1"
    reset_request_id(token)
    assert get_request_id() is None


def test_filter_attaches_request_id() -> None:
    record = _record()
    token = set_request_id("req-2")
    try:
        assert RequestIdFilter().filter(record) is True
    finally:
        reset_request_id(token)
    assert record.request_id == "req-2"


def test_filter_outside_request() -> None:
    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"


def test_sanitize_request_id() -> None:
    assert sanitize_request_id(" abc_123 ") == "abc_123"
    assert len(sanitize_request_id("a" * 65)) == 36
    assert len(sanitize_request_id(None)) == 36
