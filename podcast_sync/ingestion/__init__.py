"""
Ingestion package for podcast_sync.

Turns a feed's remote listing into downloaded files:

1. Listing (listing.py):
   - Fetches the feed document
   - Extracts every url="..." attribute in document order

2. Filters (filters.py):
   - Adjacent duplicate removal, reversal to oldest first
   - Audio only, truncation after the incremental cursor

3. Cursor (cursor.py):
   - Reads the last seen file from the feed directory

4. Download (download.py):
   - Fetches files not present locally and runs the hooks
"""

from .listing import fetch_listing, extract_urls
from .filters import (
    AUDIO_EXTENSION,
    apply_filters,
    filter_after_cursor,
    filter_audio,
    filter_out_duplicates,
    filter_reverse,
    local_filename,
)
from .cursor import find_cursor
from .download import download_file, download_feed

__all__ = [
    "AUDIO_EXTENSION",
    "apply_filters",
    "download_feed",
    "download_file",
    "extract_urls",
    "fetch_listing",
    "filter_after_cursor",
    "filter_audio",
    "filter_out_duplicates",
    "filter_reverse",
    "find_cursor",
    "local_filename",
]
