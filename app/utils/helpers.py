"""
Helper utilities for the screenshot sorter.

Common functions used across domains.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route loguru output to stdout, and problems to stderr as well.

    Args:
        level: Minimum level for the stdout sink

    Raises:
        ValueError: If loguru has no level called ``level``
    """
    level = level.upper()
    level_no = logger.level(level).no
    warning_no = logger.level("WARNING").no

    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level,
        filter=lambda record: record["level"].no < warning_no,
    )
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level if level_no > warning_no else "WARNING",
    )


def safe_path(path: str) -> Path:
    """
    Convert string to an absolute, canonical Path.

    Args:
        path: Path string

    Returns:
        Path object

    Raises:
        OSError: If the path cannot be resolved
    """
    return Path(path).expanduser().resolve(strict=True)


def is_numeric_name(name: str) -> bool:
    """Check if a directory name is a plain non-negative decimal number."""
    return name.isascii() and name.isdigit()
