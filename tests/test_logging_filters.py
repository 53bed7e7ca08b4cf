"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from storefront.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    StructuredLogger,
    clear_request_id,
    set_request_id,
)


@pytest.fixture
def capture():
    """Logger wired with the production filters and formatter."""

    logger = logging.getLogger("test_storefront_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()


def test_sensitive_filter_redacts_credentials(capture):
    """Ensure SensitiveDataFilter redacts key and token fields."""

    logger, stream = capture
    logger.info(
        "test_event",
        extra={
            "authorization": "Bearer abc.def",
            "x-api-key": "another-secret",
            "safe_field": "visible",
        },
    )

    output = stream.getvalue()

    assert "abc.def" not in output
    assert "another-secret" not in output
    assert "[REDACTED]" in output
    assert "visible" in output


def test_sensitive_filter_redacts_contact_details(capture):
    """Ensure phone numbers and raw bodies never reach the output."""

    logger, stream = capture
    logger.info(
        "contact_event",
        extra={
            "phone": "+819012345678",
            "body": '{"email": "hanzo@iga-forge.com"}',
            "message_length": 42,
        },
    )

    output = stream.getvalue()

    assert "+819012345678" not in output
    assert "hanzo@iga-forge.com" not in output
    assert "message_length" in output


def test_sensitive_filter_allows_safe_fields(capture):
    """Verify safe fields pass through unmodified."""

    logger, stream = capture
    logger.info(
        "safe_event",
        extra={
            "endpoint": "contact.submit",
            "status_code": 200,
            "duration_ms": 150.5,
        },
    )

    output = stream.getvalue()

    assert "contact.submit" in output
    assert "200" in output
    assert "[REDACTED]" not in output


def test_sensitive_filter_redacts_nested_dicts(capture):
    """Ensure nested sensitive fields are redacted."""

    logger, stream = capture
    logger.info(
        "nested_event",
        extra={
            "headers": {
                "cookie": "session=secret-key",
                "user-agent": "pytest",
            },
        },
    )

    output = stream.getvalue()

    assert "secret-key" not in output
    assert "[REDACTED]" in output
    assert "pytest" in output


def test_request_id_is_attached(capture):
    logger, stream = capture
    set_request_id("req-123")
    try:
        logger.info("with_id")
    finally:
        clear_request_id()

    assert json.loads(stream.getvalue())["request_id"] == "req-123"


def test_structured_logger_serializes_exception(capture):
    logger, stream = capture
    try:
        raise RuntimeError("disk full")
    except RuntimeError as exc:
        StructuredLogger(logger).log_error(exc, {"endpoint": "contact.submit"})

    record = json.loads(stream.getvalue())
    assert record["level"] == "error"
    assert record["error_type"] == "RuntimeError"
    assert record["endpoint"] == "contact.submit"
    assert "Traceback" in record["exception"]
    assert "disk full" in record["exception"]


def test_structured_logger_renames_reserved_keys(capture):
    logger, stream = capture

    StructuredLogger(logger).log_info("renamed", {"name": "contact", "message": "x"})

    record = json.loads(stream.getvalue())
    assert record["ctx_name"] == "contact"
    assert record["ctx_message"] == "x"
