"""
Storage module for the feed directories.

The file system is the only state: file names deduplicate downloads and
modification times order both the incremental cursor and the retention.
"""

from .local import LocalStorage, BYTES_PER_MB
from .retention import remove_excess_files

__all__ = [
    "BYTES_PER_MB",
    "LocalStorage",
    "remove_excess_files",
]
