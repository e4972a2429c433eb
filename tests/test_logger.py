"""Tests for logging setup."""

import logging

import pytest

import logger


@pytest.fixture
def fresh_logging(monkeypatch):
    """Allow setup_logging to run again and restore root handlers afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(logger, "_logging_initialized", False)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestContextFilter:
    """Tests for ContextFilter."""

    def test_short_name(self):
        """Test the last dotted component becomes short_name."""
        record = logging.LogRecord("core.game.engine", logging.INFO, __file__, 1, "msg", None, None)
        assert logger.ContextFilter().filter(record)
        assert record.short_name == "engine"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_and_handler(self, fresh_logging):
        """Test a single console handler at the requested level."""
        logger.setup_logging("debug")

        assert fresh_logging.level == logging.DEBUG
        assert len(fresh_logging.handlers) == 1
        assert logging.getLogger("transitions").level == logging.WARNING

    def test_runs_once(self, fresh_logging):
        """Test repeated calls leave the first configuration in place."""
        logger.setup_logging("warning")
        logger.setup_logging("debug")

        assert fresh_logging.level == logging.WARNING
