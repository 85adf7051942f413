"""
Reconciliation pass for the Screenshot Sort domain.

Files lying directly in the watched root are classified and moved into their
partition, then the ``latest`` link is refreshed. Directories (partitions, the
other bucket) are never touched.
"""

from pathlib import Path

from loguru import logger

from domains.screenshot_sort.classifier import classify
from domains.screenshot_sort.latest import update_latest
from domains.screenshot_sort.mover import move_file


def update_file(root: Path, path: Path) -> bool:
    """
    Classify and move one file of ``root``.

    Args:
        root: Watched screenshot directory
        path: File to sort; anything that is not a regular file is skipped

    Returns:
        True if the file was moved, False if it was skipped

    Raises:
        MoveError: If the move failed
    """
    if not path.is_file():
        return False

    move_file(root, path.name, classify(path.name))
    return True


def clean_directory(root: Path) -> list[tuple[Path, OSError]]:
    """
    Sort every file currently in ``root`` and refresh ``latest``.

    Per-file failures are logged and collected; the pass carries on with the
    next entry.

    Args:
        root: Watched screenshot directory

    Returns:
        List of (path, error) pairs for files that could not be moved

    Raises:
        OSError: If ``root`` cannot be listed or ``latest`` cannot be updated
    """
    logger.info(f'Started cleaning "{root}"')

    failures: list[tuple[Path, OSError]] = []
    for entry in sorted(root.iterdir()):
        try:
            update_file(root, entry)
        except OSError as e:
            failures.append((entry, e))

    for path, error in failures:
        logger.error(f'Error while processing "{path}": {error}')

    update_latest(root)

    logger.info("Cleaning done")
    return failures
