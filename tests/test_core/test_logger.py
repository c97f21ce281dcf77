"""
Tests for the logging module.

Tests logger setup, configuration, and output handling.
"""

import logging
import sys
from pathlib import Path

from papr.core.logger import LOG_FILENAME, setup_logging, setup_logging_from_config, get_logger


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_sets_root_level(self, reset_logger_singleton):
        """Test that setup_logging configures the root logger."""
        setup_logging(log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_with_file_handler(self, temp_dir: Path, reset_logger_singleton):
        """Test that a rotating log file is written when a directory is given."""
        logs_dir = temp_dir / "logs"

        setup_logging(
            log_level="INFO",
            logs_directory=logs_dir,
            max_file_size_mb=1,
            backup_count=1
        )

        get_logger("test").info("Test message")

        assert (logs_dir / LOG_FILENAME).exists()

    def test_console_output_goes_to_stderr(self, reset_logger_singleton):
        """Test that console records stay off stdout."""
        setup_logging(log_level="INFO")

        streams = [getattr(h, "stream", None) for h in logging.getLogger().handlers]
        assert sys.stderr in streams
        assert sys.stdout not in streams

    def test_setup_only_runs_once(self, reset_logger_singleton):
        """Test that setup_logging only initializes once."""
        setup_logging(log_level="DEBUG")
        initial_handlers = len(logging.getLogger().handlers)

        setup_logging(log_level="WARNING")

        assert len(logging.getLogger().handlers) == initial_handlers


class TestSetupFromConfig:
    """Tests for setup_logging_from_config."""

    def test_uses_config_values(self, temp_config: Path, reset_config_singleton, reset_logger_singleton):
        """Test that level and log directory come from the config file."""
        from papr.core.config_loader import get_config
        config = get_config(temp_config)

        setup_logging_from_config(config)
        get_logger("papr.test").debug("written")

        assert logging.getLogger().level == logging.DEBUG
        assert (config.paths.logs_directory / LOG_FILENAME).exists()


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_named_logger(self, reset_logger_singleton):
        """Test that get_logger returns a logger with the given name."""
        logger = get_logger("papr.search.engine")

        assert logger.name == "papr.search.engine"

    def test_get_logger_without_config_file(
        self, temp_dir: Path, monkeypatch, reset_config_singleton, reset_logger_singleton
    ):
        """Test that a missing config file falls back to default logging."""
        monkeypatch.chdir(temp_dir)

        logger = get_logger("auto_init_test")
        logger.info("This should not raise")

        assert logger is not None
