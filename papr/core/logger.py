"""
Logging setup for the paper library.

Log records go to stderr, leaving stdout to the command line output,
and optionally to a rotating papr.log file. Library modules only ever
call get_logger(__name__); the first call configures the root logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from .exceptions import ConfigurationError


LOG_FILENAME = "papr.log"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# pdfminer (under pdfplumber) and pypdf report every odd font at DEBUG/WARNING.
QUIET_LOGGERS = ("pdfminer", "pypdf")

_logger_initialized = False


def _build_handlers(
    formatter: logging.Formatter,
    logs_directory: Path,
    max_file_size_mb: int,
    backup_count: int
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    log_level: str = "INFO",
    log_format: str = DEFAULT_FORMAT,
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Configure the root logger once per process.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log records.
        logs_directory: Where papr.log rotates. None disables file logging.
        max_file_size_mb: Size at which papr.log rotates.
        backup_count: Rotated files kept.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in _build_handlers(
        logging.Formatter(log_format), logs_directory, max_file_size_mb, backup_count
    ):
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    _logger_initialized = True


def setup_logging_from_config(config) -> None:
    """Configure logging from the logging and paths sections of a Config."""
    settings = config.logging
    setup_logging(
        log_level=settings.level,
        log_format=settings.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=settings.max_file_size_mb,
        backup_count=settings.backup_count
    )


def get_logger(name: str) -> logging.Logger:
    """
    Return the named logger, configuring logging on first use.

    Settings come from config/config.json; without one, defaults apply
    and nothing is written to disk.
    """
    if not _logger_initialized:
        from .config_loader import get_config
        try:
            config = get_config()
        except ConfigurationError:
            setup_logging()
        else:
            setup_logging_from_config(config)

    return logging.getLogger(name)
