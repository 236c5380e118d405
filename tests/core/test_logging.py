"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import pytest
import structlog

from priv8.config.models import LoggingConfig, LogOutputConfig
from priv8.core.logging import (
    configure_logging,
    get_log_file_path,
    get_logger,
    log_context,
)


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_log_then_valid_json_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON format produces valid JSON with required fields."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("test message", key="value")

        # Then
        captured = capsys.readouterr()
        lines = [line for line in captured.err.strip().split("\n") if line]
        if lines:
            data = json.loads(lines[-1])
            assert data["event"] == "test message"
            assert data["key"] == "value"
            assert "timestamp" in data
            assert data["level"] == "info"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()
        assert get_log_file_path() == log_file

    def test_given_per_output_levels_when_log_then_filtered_per_output(
        self, tmp_path: Path
    ) -> None:
        """Each output applies its own level."""
        # Given
        verbose_file = tmp_path / "debug.log"
        quiet_file = tmp_path / "error.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(verbose_file), level="DEBUG"),
                LogOutputConfig(format="json", destination=str(quiet_file), level="ERROR"),
            ],
        )
        configure_logging(config=config)
        logger = get_logger("multi")

        # When
        logger.debug("grammar_loaded", grammar="bash")
        logger.error("processing_failed")

        # Then
        verbose = verbose_file.read_text()
        quiet = quiet_file.read_text()
        assert "grammar_loaded" in verbose
        assert "processing_failed" in verbose
        assert "grammar_loaded" not in quiet
        assert "processing_failed" in quiet

    def test_given_log_context_when_log_then_context_only_inside_block(
        self, tmp_path: Path
    ) -> None:
        """Values from log_context are merged into lines emitted inside the block."""
        # Given
        log_file = tmp_path / "ctx.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        logger = get_logger("ctx")

        # When
        with log_context(path="deploy.sh"):
            logger.info("file_parsed")
        logger.info("done")

        # Then
        inside, outside = (json.loads(line) for line in log_file.read_text().splitlines())
        assert inside["path"] == "deploy.sh"
        assert inside["logger"] == "ctx"
        assert "path" not in outside

    def test_given_console_only_when_configured_then_no_log_file(self) -> None:
        configure_logging(level="INFO")

        assert get_log_file_path() is None


class TestLogOutputConfig:
    """Destination validation."""

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValueError):
            LogOutputConfig(destination="relative/file.log")

    def test_console_destinations_accepted(self) -> None:
        assert LogOutputConfig(destination="stdout").destination == "stdout"
        assert LogOutputConfig(destination="stderr").destination == "stderr"
