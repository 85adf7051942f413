"""Relocate a single file into a subdirectory of its base directory."""

from pathlib import Path

from loguru import logger


class MoveError(OSError):
    """A move failed; ``path`` is the path the failing operation touched."""

    def __init__(self, path: Path, error: OSError):
        super().__init__(error.errno, error.strerror or str(error), str(path))
        self.path = path


def move_file(base: Path, name: str, destination: Path) -> Path:
    """
    Move ``base/name`` to ``base/destination/name``.

    Missing directories along ``destination`` are created. A file already
    present at the target is handled by the platform rename (replaced on
    POSIX).

    Args:
        base: Directory holding the file
        name: File name inside ``base``
        destination: Target directory, relative to ``base``

    Returns:
        Final path of the file

    Raises:
        MoveError: If the directory cannot be created or the rename fails
    """
    source = base / name
    target_dir = base / destination
    target = target_dir / name

    logger.info(f'Move "{source}" -> "{target}"')

    if not target_dir.exists():
        logger.info(f'Create "{target_dir}"')
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MoveError(target_dir, e) from e

    try:
        source.rename(target)
    except OSError as e:
        raise MoveError(source, e) from e

    return target
