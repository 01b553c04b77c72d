"""Tests for the logging configuration."""

import logging

import pytest
import structlog

from canteiro.config import Settings, bind_request_context, clear_request_context
from canteiro.config.logging import QUIET_LOGGERS, app_context, configure_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    clear_request_context()
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestAppContext:
    def test_stamps_identity(self):
        processor = app_context(Settings(app_name="Canteiro", environment="staging"))

        event = processor(None, "info", {"event": "bill_created"})

        assert event["app"] == "Canteiro"
        assert event["environment"] == "staging"
        assert event["event"] == "bill_created"

    def test_keeps_explicit_values(self):
        processor = app_context(Settings(environment="production"))

        assert processor(None, "info", {"environment": "x"})["environment"] == "x"


class TestRequestContext:
    def test_bind_and_merge(self):
        bind_request_context("abc123", user_id="u1", role="admin")

        merged = structlog.contextvars.merge_contextvars(None, "info", {"event": "x"})

        assert merged["request_id"] == "abc123"
        assert merged["user_id"] == "u1"
        assert merged["role"] == "admin"

    def test_anonymous_request(self):
        bind_request_context("abc123")

        assert structlog.contextvars.get_contextvars() == {"request_id": "abc123"}

    def test_rebinding_drops_previous_request(self):
        bind_request_context("first", user_id="u1")
        bind_request_context("second")

        assert structlog.contextvars.get_contextvars() == {"request_id": "second"}

    def test_clear(self):
        bind_request_context("abc123", user_id="u1")
        clear_request_context()

        assert structlog.contextvars.get_contextvars() == {}


class TestConfigureLogging:
    def test_quiets_third_party_loggers(self):
        configure_logging(Settings(log_level="DEBUG"))

        assert logging.getLogger().level == logging.DEBUG
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_json_outside_development(self):
        configure_logging(Settings(environment="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
