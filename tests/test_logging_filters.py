"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from app.core.logging import JsonFormatter, SensitiveDataFilter, hash_identifier


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_user_ids():
    """Raw user identities never reach the log output."""

    logger, stream = _capture("test_user_redaction")

    logger.info(
        "fortune_event",
        extra={
            "user_id": "alice@example.com",
            "userId": "bob",
            "user_hash": hash_identifier("alice@example.com"),
        },
    )

    output = stream.getvalue()

    assert "alice@example.com" not in output
    assert '"bob"' not in output
    assert "[REDACTED]" in output
    assert hash_identifier("alice@example.com") in output


def test_sensitive_filter_redacts_frame_payloads():
    """Signed Frame payload fields are redacted, even nested."""

    logger, stream = _capture("test_frame_redaction")

    logger.info(
        "frame_event",
        extra={
            "body": {
                "untrustedData": {"fid": 42},
                "trustedData": {"messageBytes": "0a1b2c"},
            },
            "body_fields": ["trustedData", "untrustedData"],
        },
    )

    output = stream.getvalue()

    assert "0a1b2c" not in output
    assert "[REDACTED]" in output
    assert "body_fields" in output


def test_sensitive_filter_allows_safe_fields():
    """Verify safe fields pass through unmodified."""

    logger, stream = _capture("test_safe_fields")

    logger.info(
        "safe_event",
        extra={
            "request_id": "req-123",
            "path": "/api/fortune/new",
            "status_code": 200,
            "duration_ms": 1.5,
        },
    )

    output = stream.getvalue()

    assert "req-123" in output
    assert "/api/fortune/new" in output
    assert "200" in output
    assert "[REDACTED]" not in output


def test_json_formatter_includes_exception():
    logger, stream = _capture("test_exception")

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("failed")

    record = json.loads(stream.getvalue())

    assert record["message"] == "failed"
    assert record["level"] == "error"
    assert "RuntimeError: boom" in record["exception"]


def test_hash_identifier_is_stable_and_short():
    assert hash_identifier("u1") == hash_identifier("u1")
    assert hash_identifier("u1") != hash_identifier("u2")
    assert len(hash_identifier("u1")) == 16
