"""
Tests for console log routing.
"""

import logging

import pytest

from pastie.config import AppConfig
from pastie.services.log_service import (
    ConsoleHandler,
    ConsoleStream,
    configure_logging,
    format_message,
    level_prefix,
)


@pytest.fixture
def sink():
    lines = []

    def _sink(text, level):
        lines.append((text, level))

    _sink.lines = lines
    return _sink


class TestFormatMessage:
    """Test severity prefixes."""

    def test_prefix_per_level(self):
        assert level_prefix(logging.DEBUG) == "[debug]"
        assert level_prefix(logging.INFO) == "[info]"
        assert level_prefix(25) == "[info]"
        assert level_prefix(logging.WARNING) == "[warning]"
        assert level_prefix(logging.ERROR) == "[error]"
        assert level_prefix(logging.CRITICAL) == "[fatal]"
        assert level_prefix(1) == "[debug]"

    def test_each_line_is_prefixed(self):
        assert format_message("a\nb\n", logging.ERROR) == "[error] a\n[error] b"


class TestConsoleStream:
    """Test line buffering of redirected streams."""

    def test_complete_lines_only(self, sink):
        stream = ConsoleStream(sink, logging.ERROR)

        assert stream.write("first\nsec") == 9
        assert sink.lines == [("[error] first", logging.ERROR)]

        stream.write("ond\n")
        assert sink.lines[-1] == ("[error] second", logging.ERROR)

    def test_flush_emits_partial_line(self, sink):
        stream = ConsoleStream(sink, logging.INFO)
        stream.write("tail")
        stream.flush()
        stream.flush()

        assert sink.lines == [("[info] tail", logging.INFO)]

    def test_print_goes_through(self, sink):
        stream = ConsoleStream(sink, logging.INFO)
        print("hello", 42, file=stream)

        assert sink.lines == [("[info] hello 42", logging.INFO)]


class TestConsoleHandler:
    """Test logging records reaching the console."""

    def test_records_are_formatted(self, sink):
        logger = logging.getLogger("pastie.tests.console")
        logger.propagate = False
        logger.setLevel(logging.DEBUG)
        handler = ConsoleHandler(sink)
        logger.addHandler(handler)
        try:
            logger.warning("disk %s", "full")
        finally:
            logger.removeHandler(handler)

        assert sink.lines == [("[warning] pastie.tests.console: disk full", logging.WARNING)]


class TestConfigureLogging:
    """Test root logger configuration."""

    def test_level_from_config(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(AppConfig(log_level="debug"))
            assert root.level == logging.DEBUG
            configure_logging(AppConfig(log_level="nonsense"))
            assert root.level == logging.INFO
        finally:
            root.setLevel(previous)
