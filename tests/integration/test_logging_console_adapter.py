"""Integration tests for ConsoleAdapter with real structlog.

Tests cover:
- JSON output on stdout
- Redaction of tokens and passwords
- Error details and bound context
- Request-scoped contextvars (trace_id)
"""

import json
import sys
from io import StringIO
from unittest.mock import patch

import pytest
import structlog

from src.infrastructure.logging.console_adapter import ConsoleAdapter, redact_secrets


def capture(log_calls) -> list[dict]:
    captured_output = StringIO()
    with patch.object(sys, "stdout", captured_output):
        adapter = ConsoleAdapter(use_json=True)
        log_calls(adapter)
    return [
        json.loads(line)
        for line in captured_output.getvalue().splitlines()
        if line.strip()
    ]


@pytest.mark.integration
class TestConsoleAdapterIntegration:
    def test_json_mode_produces_valid_json(self):
        (entry,) = capture(lambda log: log.info("JSON test", key="value", count=42))

        assert entry["event"] == "JSON test"
        assert entry["key"] == "value"
        assert entry["count"] == 42
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_debug_filtered_at_info_level(self):
        entries = capture(lambda log: (log.debug("hidden"), log.warning("shown")))

        assert [e["event"] for e in entries] == ["shown"]

    def test_tokens_truncated_and_passwords_masked(self):
        token = "a1b2c3d4e5f6a7b8c9d0"

        (entry,) = capture(
            lambda log: log.info(
                "Token issued", token=token, new_password="Sn3aky!23", user="ada"
            )
        )

        assert entry["token"] == "a1b2c3d4..."
        assert entry["new_password"] == "***"
        assert entry["user"] == "ada"
        assert token not in json.dumps(entry)

    def test_error_includes_exception_details(self):
        (entry,) = capture(
            lambda log: log.error("Delivery failed", error=ValueError("boom"))
        )

        assert entry["error_type"] == "ValueError"
        assert entry["error_message"] == "boom"

    def test_bound_context_is_included(self):
        (entry,) = capture(lambda log: log.bind(component="cleanup").info("Tick"))

        assert entry["component"] == "cleanup"

    def test_contextvars_are_merged(self):
        structlog.contextvars.bind_contextvars(trace_id="trace-123")
        try:
            (entry,) = capture(lambda log: log.info("In request"))
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")

        assert entry["trace_id"] == "trace-123"


@pytest.mark.integration
class TestRedactSecrets:
    def test_non_string_token_left_alone(self):
        event = redact_secrets(None, "info", {"token": None, "password": None})

        assert event == {"token": None, "password": None}
