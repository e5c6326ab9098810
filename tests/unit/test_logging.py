"""Tests for structlog setup and secret redaction."""

import json
import logging

import pytest
import structlog

from src.shared.logging import (
    REDACTED,
    get_logger,
    level_number,
    logger_name,
    redact_secrets,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestRedaction:
    def test_top_level_secrets(self):
        event = redact_secrets(None, "info", {"event": "x", "stripe_api_key": "sk_live_1", "Token": "t"})
        assert event["stripe_api_key"] == REDACTED
        assert event["Token"] == REDACTED
        assert event["event"] == "x"

    def test_nested_secrets(self):
        event = redact_secrets(
            None, "info", {"event": "x", "context": {"authorization": "Bearer abc", "path": "/v1/charges"}}
        )
        assert event["context"]["authorization"] == REDACTED
        assert event["context"]["path"] == "/v1/charges"

    def test_lists_are_left_alone(self):
        event = redact_secrets(None, "info", {"event": "x", "keys": ["secret", "token"]})
        assert event["keys"] == ["secret", "token"]


class TestLevels:
    def test_warn_maps_to_warning(self):
        assert level_number("warn") == logging.WARNING
        assert level_number("DEBUG") == logging.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            level_number("verbose")


class TestLoggerNames:
    def test_hierarchical_name(self):
        assert logger_name() == "stripe-mcp"
        assert logger_name("tools", "stripe_raw_request") == "stripe-mcp:tools:stripe_raw_request"


class TestSetupLogging:
    def test_json_lines_on_stderr(self, capsys):
        setup_logging("info")
        logger = get_logger("tools")
        logger.info("invocation_received", api_key="sk_test_1", has_charge=True)

        captured = capsys.readouterr()
        assert captured.out == ""
        payload = json.loads(captured.err.strip().splitlines()[-1])
        assert payload["message"] == "invocation_received"
        assert payload["level"] == "info"
        assert payload["logger"] == "stripe-mcp:tools"
        assert "logger_name" not in payload
        assert payload["api_key"] == REDACTED
        assert payload["has_charge"] is True
        assert "timestamp" in payload

    def test_filters_below_level(self, capsys):
        setup_logging("warn")
        logger = get_logger()
        logger.info("dropped")
        logger.warning("kept")

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "kept"

    def test_module_level_logger_picks_up_later_config(self, capsys):
        logger = get_logger("stripe")
        setup_logging("info")
        logger.info("stripe_client_initialized", api_version="account_default")

        captured = capsys.readouterr()
        assert captured.out == ""
        payload = json.loads(captured.err.strip())
        assert payload["logger"] == "stripe-mcp:stripe"
        assert payload["message"] == "stripe_client_initialized"


class TestModuleLoggers:
    def test_tool_modules_import(self):
        from src.api import server
        from src.api.tools import fraud, raw_request, refunds
        from src.payments import gateway

        assert server.tools_logger is not None
        assert fraud.logger is not None
        assert raw_request.logger is not None
        assert refunds.logger is not None
        assert gateway.logger is not None
