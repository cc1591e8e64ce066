"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from donamatch.core.logger import JSONFormatter, configure_logging, ensure_request_id


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        configure_logging(previous)


def test_json_formatter_promotes_extras() -> None:
    record = logging.LogRecord("donamatch.auth", logging.INFO, __file__, 1, "sign-in rejected", None, None)
    record.reason = "bad_password"
    record.role = "donor"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "sign-in rejected"
    assert payload["reason"] == "bad_password"
    assert payload["role"] == "donor"
    assert "user_id" not in payload


def test_request_id_honours_incoming_header(app) -> None:
    # A fresh app context gives the request its own ``g``.
    with app.app_context(), app.test_request_context(headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"
        assert ensure_request_id() == "abc-123"


def test_request_id_is_not_shared_between_requests(app) -> None:
    with app.app_context(), app.test_request_context(headers={"X-Request-ID": "first"}):
        assert ensure_request_id() == "first"
    with app.app_context(), app.test_request_context(headers={"X-Request-ID": "second"}):
        assert ensure_request_id() == "second"
