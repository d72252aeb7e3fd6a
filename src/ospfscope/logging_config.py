"""
Logging configuration for ospfscope.

Library modules only log through ``logging.getLogger(__name__)``; handlers
are attached here by the CLI (or by an embedding application).
"""

import logging
import sys
from collections import Counter
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ospfscope.config import OSPFScopeConfig, get_config


class StructuredFormatter(logging.Formatter):
    """Pipe-separated formatter for log files."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "module_name"):
            record.module_name = record.module
        if not hasattr(record, "function_name"):
            record.function_name = record.funcName
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_dir: str | None = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    enable_console: bool = True,
    enable_file: bool = False,
) -> logging.Logger:
    """
    Set up the ``ospfscope`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Custom log file path (overrides log_dir)
        log_dir: Directory for log files (defaults to ~/.ospfscope/logs)
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
        enable_console: Log to stderr
        enable_file: Log to a rotating file

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("ospfscope")
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    console_fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_fmt = StructuredFormatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-28s | %(module_name)-12s | "
            "%(function_name)-24s | %(lineno)-4d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # stdout carries command output (tables, JSON), so logs go to stderr
    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(console_fmt)
        logger.addHandler(console_handler)

    if enable_file:
        if log_file:
            log_path = Path(log_file)
        elif log_dir:
            log_path = Path(log_dir) / "ospfscope.log"
        else:
            log_path = Path.home() / ".ospfscope" / "logs" / "ospfscope.log"

        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_fmt)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def configure_logging(debug: bool = False, config: OSPFScopeConfig | None = None) -> logging.Logger:
    """
    Configure logging from an ospfscope configuration.

    Args:
        debug: Force DEBUG level regardless of the configured level
        config: Configuration to use (defaults to the global one)
    """
    config = config or get_config()
    level = "DEBUG" if debug else config.log_level
    return setup_logging(
        level=level,
        log_file=config.log_file,
        enable_console=True,
        enable_file=bool(config.log_file),
    )


# =============================================================================
# Failure tracking
# =============================================================================

class ErrorTracker:
    """Failures of one CLI invocation, counted by kind (no_data, invalid_input)."""

    def __init__(self):
        self.counts: Counter[str] = Counter()
        self.last_messages: dict[str, str] = {}
        self.logger = logging.getLogger(__name__)

    def record(self, kind: str, message: str, exception: Exception | None = None) -> None:
        """Count a failure and log it (with traceback when an exception is given)."""
        self.counts[kind] += 1
        self.last_messages[kind] = message
        self.logger.error(f"{kind}: {message}", exc_info=exception)

    def summary(self) -> list[tuple[str, int, str]]:
        """(kind, count, last message) rows sorted by kind."""
        return [(kind, count, self.last_messages[kind]) for kind, count in sorted(self.counts.items())]

    def reset(self) -> None:
        self.counts.clear()
        self.last_messages.clear()


_error_tracker = ErrorTracker()


def track_error(kind: str, message: str, exception: Exception | None = None) -> None:
    """Record a failure on the global tracker."""
    _error_tracker.record(kind, message, exception)


def get_error_stats() -> dict[str, int]:
    """Failure counts by kind."""
    return dict(_error_tracker.counts)


def error_summary() -> list[tuple[str, int, str]]:
    return _error_tracker.summary()


def reset_error_stats() -> None:
    _error_tracker.reset()
