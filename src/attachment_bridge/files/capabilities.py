"""Limits deciding which local files may be sent to a remote endpoint."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Files at or above this size stay local: 10MB
MAX_REMOTE_FILE_SIZE = 10 * 1024 * 1024


def is_remote_eligible(path: str | Path, max_size: int = MAX_REMOTE_FILE_SIZE) -> bool:
    """Check whether a file may be uploaded for remote processing.

    Args:
        path: Path to the candidate file.
        max_size: Exclusive upper bound on the file size in bytes.

    Returns:
        False for anything that is not a regular file, for files that cannot
        be inspected, and for files of ``max_size`` bytes or more.
    """
    if not os.path.isfile(path):
        return False

    try:
        size = os.path.getsize(path)
    except OSError as exc:
        logger.debug("Could not stat %s: %s", path, exc)
        return False

    if size >= max_size:
        logger.warning(
            "Excluding %s from upload: %d bytes is not below the %d byte limit",
            path,
            size,
            max_size,
        )
        return False
    return True
