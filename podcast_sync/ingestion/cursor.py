"""Incremental cursor read from the feed directory."""

import logging
from pathlib import Path
from typing import Optional

from podcast_sync.storage import LocalStorage


logger = logging.getLogger("podcast_sync.cursor")


def find_cursor(directory: Path) -> Optional[str]:
    """
    Return the name of the second most recently modified file of directory.

    The most recent file is left out: it may be the partial result of an
    interrupted run, and the existence check already covers it otherwise.

    Returns:
        File name, or None when the directory holds fewer than two files.
    """
    files = LocalStorage(directory).files_by_age(newest_first=True)
    if len(files) < 2:
        logger.debug(f"No cursor in {directory}: {len(files)} files")
        return None

    cursor = files[1].name
    logger.debug(f"Cursor for {directory}: {cursor}")
    return cursor
