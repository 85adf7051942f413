#!/usr/bin/env python3
"""
Screenshot Sorter - Main entry point

Keeps a screenshot directory organised:
- Sorts existing screenshots into <root>/YYYY/MM/DD and <root>/other
- Watches the directory and sorts new screenshots as they are written
- Keeps <root>/latest pointing at the newest day
- Stops cleanly on SIGINT/SIGTERM
"""

import argparse
import sys
import threading
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

from loguru import logger

from app.utils.config import get_settings
from app.utils.helpers import LOG_LEVELS, configure_logging, safe_path
from domains.screenshot_sort.reconciler import clean_directory
from domains.screenshot_sort.shutdown import ShutdownCoordinator
from domains.screenshot_sort.stream import EventStream
from domains.screenshot_sort.watchers.filesystem import (
    EXIT_FAILURE,
    ScreenshotWatcher,
    WatchLoop,
)


class RootPathError(Exception):
    """The screenshot directory is missing or unusable."""


def get_version() -> str:
    try:
        return version("screenshot-sorter")
    except PackageNotFoundError:
        return "0.0.0"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(
        description="Sort screenshots into year/month/day directories and keep them sorted.",
    )
    parser.add_argument(
        "screenshot_dir",
        metavar="PATH",
        nargs="?",
        default=None,
        help="Path to screenshot directory (default: $SCREENSHOT_DIR).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Minimum log level (default: $LOG_LEVEL or INFO).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_version()}",
    )

    return parser.parse_args(argv)


def resolve_root(raw: Optional[str]) -> Path:
    """
    Turn the user supplied path into a canonical directory path.

    Args:
        raw: Path as given on the command line

    Returns:
        Absolute, existing directory

    Raises:
        RootPathError: If the path is missing, unresolvable or not a directory
    """
    if not raw:
        logger.error("No screenshot directory given")
        raise RootPathError("no screenshot directory given")

    try:
        root = safe_path(raw)
    except FileNotFoundError:
        logger.error(f'Path "{raw}" does not exist')
        raise RootPathError(raw)
    except (OSError, RuntimeError) as e:
        logger.error(f'Could not canonicalize "{raw}": {e}')
        raise RootPathError(raw) from e

    if not root.is_dir():
        logger.error(f'"{root}" is not a directory')
        raise RootPathError(str(root))

    return root


def run(root: Path) -> int:
    """
    Sort ``root``, then watch it until shutdown.

    Returns:
        Process exit code
    """
    try:
        clean_directory(root)
    except OSError as e:
        logger.error(f'Error while cleaning directory "{root}": {e}')
        return EXIT_FAILURE

    stream = EventStream()
    shutdown_requested = threading.Event()
    coordinator = ShutdownCoordinator(stream, shutdown_requested)

    try:
        coordinator.install()
    except (OSError, ValueError) as e:
        logger.error(f"Error while creating signal handler: {e}")
        return EXIT_FAILURE

    try:
        watcher = ScreenshotWatcher(root, stream)
    except OSError as e:
        logger.error(f'Error creating watcher for "{root}": {e}')
        return EXIT_FAILURE

    coordinator.start()

    try:
        watcher.start_watching()
    except OSError as e:
        logger.error(f'Error watching "{root}": {e}')
        return EXIT_FAILURE

    try:
        return WatchLoop(root, stream, shutdown_requested).run()
    finally:
        watcher.stop_watching()


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the CLI script."""

    args = parse_args(argv)
    settings = get_settings()

    level = args.log_level or settings.log_level
    try:
        configure_logging(level)
    except ValueError as e:
        logger.error(f'Invalid log level "{level}": {e}')
        return EXIT_FAILURE

    logger.info("Screenshot Sorter")

    raw = args.screenshot_dir
    if raw is None and settings.screenshot_dir is not None:
        raw = str(settings.screenshot_dir)

    try:
        root = resolve_root(raw)
    except RootPathError:
        return EXIT_FAILURE

    return run(root)


if __name__ == "__main__":  # pragma: no cover - CLI bridge
    sys.exit(main())
