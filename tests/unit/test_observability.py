"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import sys


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_format(self):
        from mediaintake.observability.logger import StructuredFormatter

        result = json.loads(StructuredFormatter().format(self._get_record("hello")))
        assert result["message"] == "hello"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        from mediaintake.observability.logger import StructuredFormatter

        record = self._get_record("msg", extra_fields={"session_id": "abc", "size_bytes": 5})
        result = json.loads(StructuredFormatter().format(record))
        assert result["session_id"] == "abc"
        assert result["size_bytes"] == 5

    def test_non_json_values_stringified(self):
        from mediaintake.errors import ErrorCode
        from mediaintake.observability.logger import StructuredFormatter

        record = self._get_record("msg", extra_fields={"code": ErrorCode.INVALID_URL, "obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert result["code"] == "INVALID_URL"
        assert result["obj"].startswith("<object object")

    def test_exception_info_included(self):
        from mediaintake.observability.logger import StructuredFormatter

        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("err", exc_info=exc_info)))
        assert "ValueError" in result["exception"]


class TestGetLogger:
    def test_returns_logger_with_handler(self):
        from mediaintake.observability.logger import get_logger

        logger = get_logger("test.mediaintake.unique1")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_idempotent(self):
        from mediaintake.observability.logger import get_logger

        first = get_logger("test.mediaintake.unique2")
        second = get_logger("test.mediaintake.unique2")
        assert first is second
        assert len(second.handlers) == 1

    def test_string_level_and_stream(self):
        from mediaintake.observability.logger import get_logger

        stream = io.StringIO()
        logger = get_logger("test.mediaintake.unique3", level="warning", stream=stream)
        logger.info("hidden")
        logger.warning("shown", extra={"extra_fields": {"op": "x"}})
        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["op"] == "x"


class TestMetricsHook:
    def test_noop_satisfies_protocol(self):
        from mediaintake.observability.metrics import MetricsHook, NoopMetricsHook

        hook = NoopMetricsHook()
        assert isinstance(hook, MetricsHook)
        hook.increment("a")
        hook.timing("b", 1.5, tags={"status": "ok"})
        hook.gauge("c", 3.0)

    def test_custom_hook_satisfies_protocol(self):
        from mediaintake.observability.metrics import MetricsHook

        class Recorder:
            def increment(self, name, value=1, tags=None):
                pass

            def timing(self, name, ms, tags=None):
                pass

            def gauge(self, name, value, tags=None):
                pass

        assert isinstance(Recorder(), MetricsHook)

    def test_incomplete_hook_rejected(self):
        from mediaintake.observability.metrics import MetricsHook

        class OnlyIncrement:
            def increment(self, name, value=1, tags=None):
                pass

        assert not isinstance(OnlyIncrement(), MetricsHook)
