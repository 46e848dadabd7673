"""Centralized logging configuration."""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("posthog", "backoff", "urllib3")


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    format_string: str | None = None,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, logs to both file and console
        format_string: Custom log format string. Uses default if not provided
        quiet_loggers: Logger names capped at WARNING unless level is DEBUG
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    root_level = getattr(logging, level.upper())
    logging.basicConfig(
        level=root_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    if root_level > logging.DEBUG:
        for name in quiet_loggers:
            logging.getLogger(name).setLevel(max(root_level, logging.WARNING))

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {level} level")
    if log_file:
        logger.info(f"Logging to file: {log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
