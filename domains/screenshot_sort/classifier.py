"""Map screenshot filenames to their destination partition."""

import re
from pathlib import Path

OTHER_DIR = "other"

NAME_PATTERN = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2}).*\.png", re.ASCII
)


def classify(filename: str) -> Path:
    """
    Return the destination of ``filename`` relative to the watched root.

    Dated screenshots go to ``YYYY/MM/DD`` using the digits exactly as they
    appear in the name; anything else goes to the other bucket.

    Args:
        filename: Bare file name, without directories

    Returns:
        Relative destination directory
    """
    match = NAME_PATTERN.fullmatch(filename)
    if match is None:
        return Path(OTHER_DIR)

    return Path(match["year"], match["month"], match["day"])
