"""Tests for the minlog.logging module."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
import structlog

from minlog.logging import (
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_default(self) -> None:
        """Test default logging configuration (console output)."""
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("MINLOG_LOG_LEVEL", None)
            configure_logging()

            assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_json_via_env(self) -> None:
        """Test JSON logging when MINLOG_LOG_FORMAT=json."""
        with patch.dict(os.environ, {"MINLOG_LOG_FORMAT": "json"}):
            configure_logging()

            log = structlog.get_logger()
            assert log is not None

    def test_configure_logging_force_json(self) -> None:
        """Test forcing JSON output regardless of environment."""
        configure_logging(force_json=True)

        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_configure_logging_custom_level(self) -> None:
        """Test setting custom log level."""
        configure_logging(level=logging.DEBUG)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        """Test log level from MINLOG_LOG_LEVEL env var."""
        with patch.dict(os.environ, {"MINLOG_LOG_LEVEL": "info"}):
            configure_logging()

            root_logger = logging.getLogger()
            assert root_logger.level == logging.INFO

    def test_unknown_level_falls_back_to_warning(self) -> None:
        """Test that an unknown MINLOG_LOG_LEVEL is ignored."""
        with patch.dict(os.environ, {"MINLOG_LOG_LEVEL": "chatty"}):
            configure_logging()

            assert logging.getLogger().level == logging.WARNING

    def test_repeated_configuration_keeps_one_handler(self) -> None:
        """Test that reconfiguring does not duplicate handlers."""
        configure_logging()
        configure_logging(level=logging.INFO)

        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_with_name(self) -> None:
        """Test getting a logger with explicit name."""
        log = get_logger("test.module")
        assert log is not None

    def test_get_logger_without_name(self) -> None:
        """Test getting a logger without name."""
        log = get_logger()
        assert log is not None

    def test_logger_can_log_with_structured_data(self) -> None:
        """Test logging with structured data."""
        configure_logging(level=logging.DEBUG)

        log = get_logger("test")

        # Should not raise
        log.debug("expression_parsed", expression="a AND b", node_count=3)
        log.warning("setting_undefined", setting="ghost")


class TestLogOutput:
    """Tests for log output formatting."""

    def test_console_output_goes_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that console output is human-readable and off stdout."""
        configure_logging(level=logging.INFO)

        logging.getLogger("test.console").info("plain stdlib record")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "plain stdlib record" in captured.err

    def test_json_output_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that JSON output renders foreign records as JSON."""
        configure_logging(force_json=True, level=logging.INFO)

        logging.getLogger("test.json").info("json record")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert '"event": "json record"' in line
        assert '"level": "info"' in line


class TestLibraryUseWithoutConfiguration:
    """Hosts that never call configure_logging."""

    @pytest.fixture
    def unconfigured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Reset structlog and leave the stdlib root logger bare."""
        structlog.reset_defaults()
        root_logger = logging.getLogger()
        monkeypatch.setattr(root_logger, "handlers", [])
        root_logger.setLevel(logging.WARNING)

    def test_evaluate_writes_nothing_to_stdout(
        self, unconfigured: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Debug events never reach the host's stdout."""
        import minlog

        assert minlog.evaluate("a AND b", {"a": True, "b": True}) is True

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_host_logging_level_governs_output(
        self, unconfigured: None, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Events go through the stdlib logger named after the module."""
        import minlog

        with caplog.at_level(logging.DEBUG, logger="minlog"):
            minlog.parse("NOT(banned)")

        assert "minlog.expressions.parser" in {r.name for r in caplog.records}
        assert "expression_parsed" in caplog.text
