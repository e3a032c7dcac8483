"""
Quota enforcement for feed directories.

Files are evicted strictly oldest first, and only while the directory is
over quota. The size is recomputed from disk after every deletion.
"""

import logging
from pathlib import Path
from typing import Optional

from podcast_sync.logger import log_function
from .local import LocalStorage, BYTES_PER_MB


logger = logging.getLogger("podcast_sync.retention")


def _simulate_eviction(storage: LocalStorage, max_size_mb: float) -> list[str]:
    """Names of the files an eviction would remove, touching nothing."""
    files = sorted(
        storage.files(), key=lambda path: (path.stat().st_mtime, path.name)
    )
    sizes = {path: path.stat().st_size for path in files}
    total = sum(sizes.values())

    removed = []
    for path in files:
        if total / BYTES_PER_MB <= max_size_mb:
            break
        total -= sizes[path]
        removed.append(path.name)
    return removed


@log_function(logger_name="podcast_sync.retention")
def remove_excess_files(
    directory: Path, max_size_mb: Optional[float], dry_run: bool = False
) -> list[str]:
    """
    Remove the oldest files of directory until it fits in max_size_mb.

    Args:
        directory: Feed directory.
        max_size_mb: Quota in megabytes. None disables the quota.
        dry_run: If True, report the files that would be removed and keep them.

    Returns:
        Names of the removed files, oldest first.
    """
    if max_size_mb is None:
        return []

    storage = LocalStorage(directory)

    if dry_run:
        removed = _simulate_eviction(storage, max_size_mb)
        for name in removed:
            print(f"  -{name} (dry run)")
        return removed

    removed = []
    while storage.size_mb() > max_size_mb:
        oldest = storage.oldest_file()
        if oldest is None:
            break
        print(f"  -{oldest.name}")
        try:
            storage.remove(oldest)
        except OSError as e:
            # Stop here, the same file would be picked again forever
            logger.error(f"Could not remove {oldest}: {e}")
            break
        removed.append(oldest.name)

    if removed:
        logger.info(
            f"Removed {len(removed)} files from {directory}, "
            f"now {storage.size_mb():.1f}MB of {max_size_mb}MB"
        )
    return removed
