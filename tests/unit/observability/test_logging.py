"""Tests for structured logging."""

import json
import logging
import sys

from folio.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    request_id_var,
)


def make_record(message: str = "Book created", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="folio.catalog.books",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    """Test JSON output."""

    def test_basic_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(make_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "folio.catalog.books"
        assert payload["message"] == "Book created"
        assert "request_id" not in payload

    def test_request_id_included(self) -> None:
        with LogContext(request_id="req-1"):
            payload = json.loads(JsonFormatter().format(make_record()))

        assert payload["request_id"] == "req-1"

    def test_extra_fields(self) -> None:
        payload = json.loads(JsonFormatter().format(make_record(book_id="b1", obj=object())))

        assert payload["book_id"] == "b1"
        assert isinstance(payload["obj"], str)

    def test_exception_info(self) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(JsonFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad"


class TestConsoleFormatter:
    """Test console output."""

    def test_format(self) -> None:
        with LogContext(request_id="abcdefghijkl"):
            line = ConsoleFormatter(use_colors=False).format(make_record())

        assert "| INFO" in line
        assert "folio.catalog.books | Book created" in line
        assert line.endswith("req=abcdefgh")


class TestLogContext:
    """Test request ID binding."""

    def test_resets_on_exit(self) -> None:
        with LogContext(request_id="outer"):
            with LogContext(request_id="inner"):
                assert request_id_var.get() == "inner"
            assert request_id_var.get() == "outer"
        assert request_id_var.get() == ""


class TestConfigureLogging:
    """Test root logger configuration."""

    def test_json_handler(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(json_format=True, level="DEBUG")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
