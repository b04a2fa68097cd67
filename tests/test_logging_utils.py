"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from teamhub.logging_utils import JsonFormatter, configure_logging


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="teamhub.test.redaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_sensitive_data_filter_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    handler = logging.getLogger().handlers[0]
    record = _record("Authorization header Bearer %s", secret)

    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert secret not in formatted
    assert "[redacted]" in formatted


def test_query_string_tokens_are_masked_without_configured_secret():
    configure_logging("INFO", "plain", [])

    handler = logging.getLogger().handlers[0]
    record = _record("GET /users?api_token=abc123&page=2")
    for filter_ in handler.filters:
        filter_.filter(record)

    assert "abc123" not in handler.format(record)


def test_json_formatter_includes_request_context():
    record = _record("Rejected %s", "POST /teams", request_id="req-7", caller_id=42)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Rejected POST /teams"
    assert payload["request_id"] == "req-7"
    assert payload["caller_id"] == 42
    assert payload["level"] == "INFO"


def test_configure_logging_sets_level():
    configure_logging("warning", "plain", [])

    assert logging.getLogger().level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1


def test_email_addresses_are_shortened():
    configure_logging("INFO", "plain", [])

    handler = logging.getLogger().handlers[0]
    record = _record("User with email %s already exists", "jane.doe@example.com")
    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert "jane.doe@example.com" not in formatted
    assert "j***@example.com" in formatted
