#!/usr/bin/env python3
"""
Logging configuration for the Price Tracker application.

Features:
- Rich console formatting for development logs
- Rotating file handlers for production logging
- Support for quick debug mode activation via --debug or DEBUG=1
- Integration with the application's configuration system
"""
import logging
import os
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from pricetracker.config import LogLevel, PriceTrackerConfig


# Constants
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
RICH_LOG_FORMAT = "%(message)s"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5
APP_NAME = "pricetracker"


# Map between LogLevel enum and logging module levels
LOG_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


class LoggingMode(str, Enum):
    """Mode for logging configuration."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


def get_environment_log_level(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """
    Check for debug flags in environment variables.

    Supports:
    - DEBUG=1
    - PRICETRACK_DEBUG=1
    - LOGLEVEL=DEBUG (or other level names)
    - PRICETRACK_LOGLEVEL=DEBUG (or other level names)

    Returns:
        Optional[int]: Logging level or None if not specified in environment
    """
    if environ is None:
        environ = os.environ

    if environ.get("DEBUG") == "1" or environ.get("PRICETRACK_DEBUG") == "1":
        return logging.DEBUG

    log_level_str = environ.get("LOGLEVEL") or environ.get("PRICETRACK_LOGLEVEL")
    if log_level_str:
        numeric_level = getattr(logging, log_level_str.upper(), None)
        if isinstance(numeric_level, int):
            return numeric_level

    return None


def get_console_handler(rich: bool = True) -> logging.Handler:
    """
    Get a console handler for logging.

    Args:
        rich: Whether to use Rich formatting

    Returns:
        logging.Handler: Configured console handler
    """
    if rich:
        console = Console(color_system="auto", width=None, highlight=True, stderr=True)
        handler = RichHandler(
            console=console,
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_extra_lines=3,
        )
        # Rich handler includes a lot of formatting already
        handler.setFormatter(logging.Formatter(RICH_LOG_FORMAT))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    return handler


def get_file_handler(log_file: Path, max_bytes: int = MAX_LOG_SIZE, backup_count: int = LOG_BACKUP_COUNT) -> logging.Handler:
    """
    Get a rotating file handler for logging.

    Args:
        log_file: Path to the log file
        max_bytes: Maximum size of log file before rotating
        backup_count: Number of backup files to keep

    Returns:
        logging.Handler: Configured file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    return handler


def get_effective_log_level(
    config: Optional[PriceTrackerConfig] = None,
    debug: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Determine the effective log level based on multiple sources with priority:
    1. CLI --debug flag
    2. Environment variables (DEBUG, LOGLEVEL)
    3. Configuration setting

    Returns:
        int: Logging module log level (logging.DEBUG, logging.INFO, etc.)
    """
    if debug:
        return logging.DEBUG

    env_level = get_environment_log_level(environ)
    if env_level is not None:
        return env_level

    if config is not None:
        return LOG_LEVEL_MAP.get(config.log_level, logging.INFO)

    return logging.INFO


def _coerce_level(log_level: Union[int, str, LogLevel]) -> int:
    if isinstance(log_level, LogLevel):
        return LOG_LEVEL_MAP[log_level]
    if isinstance(log_level, int):
        return log_level
    numeric_level = getattr(logging, str(log_level).upper(), None)
    return numeric_level if isinstance(numeric_level, int) else logging.INFO


def configure_logging(
    config: Optional[PriceTrackerConfig] = None,
    mode: LoggingMode = LoggingMode.DEVELOPMENT,
    log_level: Optional[Union[int, str, LogLevel]] = None,
    log_file: Optional[Path] = None,
    debug: bool = False,
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        config: Application configuration (optional)
        mode: Logging mode (development or production)
        log_level: Override log level
        log_file: Override log file path
        debug: Whether --debug was passed on the command line

    Returns:
        logging.Logger: The application logger
    """
    if config is None:
        config = PriceTrackerConfig()

    if log_level is not None:
        effective_level = _coerce_level(log_level)
    else:
        effective_level = get_effective_log_level(config, debug)

    effective_log_file = log_file or config.log_file
    if effective_log_file is None and mode == LoggingMode.PRODUCTION:
        effective_log_file = Path.home() / ".pricetrack" / "logs" / "app.log"

    # Configure our app logger only; leave the root logger to the host process
    app_logger = logging.getLogger(APP_NAME)
    app_logger.setLevel(effective_level)

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    use_rich = mode == LoggingMode.DEVELOPMENT and config.color_output
    app_logger.addHandler(get_console_handler(rich=use_rich))

    if effective_log_file:
        app_logger.addHandler(get_file_handler(
            Path(effective_log_file),
            max_bytes=MAX_LOG_SIZE,
            backup_count=config.log_backup_count,
        ))

    app_logger.debug(f"Logging configured in {mode.value} mode at level {logging.getLevelName(effective_level)}")
    if effective_log_file:
        app_logger.debug(f"Logging to file: {effective_log_file}")

    return app_logger


# Module-level logger for convenience
logger = logging.getLogger(APP_NAME)
