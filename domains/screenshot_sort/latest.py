"""
Maintain the ``latest`` symlink of a screenshot root.

The newest partition is read straight from the directory tree: the highest
numbered year, then the highest month inside it, then the highest day inside
that month. Nothing is cached between refreshes.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from app.utils.helpers import is_numeric_name

LATEST_LINK = "latest"


def max_numeric_subdir(directory: Path) -> int:
    """
    Return the largest numeric subdirectory name of ``directory``.

    Names that are not numbers count as 0. A missing directory has no
    subdirectories and also yields 0.

    Args:
        directory: Directory to scan

    Returns:
        Largest value found, 0 if none

    Raises:
        OSError: If an existing directory cannot be listed
    """
    if not directory.is_dir():
        return 0

    highest = 0
    for child in directory.iterdir():
        if not child.is_dir() or child.is_symlink():
            continue
        if is_numeric_name(child.name):
            highest = max(highest, int(child.name))

    return highest


def latest_partition(root: Path) -> tuple[int, int, int, Path]:
    """
    Find the newest ``year/month/day`` partition under ``root``.

    Returns:
        Tuple of (year, month, day, day_path). ``day_path`` may not exist.
    """
    year = max_numeric_subdir(root)
    year_path = root / str(year)

    month = max_numeric_subdir(year_path)
    month_path = year_path / f"{month:02d}"

    day = max_numeric_subdir(month_path)
    day_path = month_path / f"{day:02d}"

    return year, month, day, day_path


def update_latest(root: Path) -> Optional[Path]:
    """
    Point ``root/latest`` at the newest day partition.

    A ``latest`` entry that is not a symlink is left alone. When the newest
    partition path does not exist the link is removed and not recreated.

    Args:
        root: Watched screenshot directory

    Returns:
        The day path the link now points to, or None if no link was made

    Raises:
        OSError: If the root cannot be listed or the link cannot be replaced
    """
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    year, month, day, day_path = latest_partition(root)

    latest = root / LATEST_LINK
    if latest.is_symlink():
        latest.unlink()
    elif latest.exists():
        logger.warning(f'"{latest}" is not a symlink, leaving it untouched')
        return None

    if not day_path.is_dir():
        logger.warning(f'Path found "{day_path}" for {year}-{month}-{day} does not exist')
        return None

    latest.symlink_to(day_path, target_is_directory=True)
    logger.success(f'Symlink: "{latest}" -> "{day_path}"')

    return day_path
