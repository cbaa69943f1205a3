"""
AppBuilder Stream SDK - Logging Tests
"""

import io
import json
import logging

import pytest

from appbuilder_stream.observability import JSONFormatter, get_logger, setup_logging


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def _record(self, **extra):
        record = logging.LogRecord("appbuilder_stream.test", logging.INFO, __file__, 1, "hello", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))
        assert data["level"] == "INFO"
        assert data["logger"] == "appbuilder_stream.test"
        assert data["message"] == "hello"
        assert "timestamp" in data

    def test_extra_fields(self):
        data = json.loads(JSONFormatter().format(self._record(request_id="req-1")))
        assert data["request_id"] == "req-1"

    def test_sensitive_fields_redacted(self):
        data = json.loads(JSONFormatter().format(self._record(authorization="Bearer x", token="t")))
        assert data["authorization"] == "[REDACTED]"
        assert data["token"] == "[REDACTED]"

    def test_location(self):
        data = json.loads(JSONFormatter(include_location=True).format(self._record()))
        assert data["location"].endswith(":1")


class TestStructuredLogger:
    """Tests for get_logger/setup_logging."""

    def test_kwargs_become_extra(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level="DEBUG", stream=stream)

        get_logger("appbuilder_stream.test").debug("Stream exhausted", request_id="req-9")

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "Stream exhausted"
        assert data["request_id"] == "req-9"

    def test_level_filters(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(level="WARNING", stream=stream)

        get_logger("appbuilder_stream.test").debug("hidden")

        assert stream.getvalue() == ""
