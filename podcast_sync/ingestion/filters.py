"""
Listing filters.

Each filter takes a sequence of urls and returns a new list, apply_filters()
chains them in the order the synchronization relies on:

    duplicates -> reverse -> audio -> cursor

Duplicates are removed before reversal so only entries adjacent in the feed
order collapse. The audio filter runs before the cursor cut so the cursor is
only compared against audio entries.
"""

import posixpath
from typing import Optional, Sequence


AUDIO_EXTENSION = ".mp3"


def local_filename(url: str) -> str:
    """Name of the local file a url is downloaded to."""
    return posixpath.basename(url)


def filter_out_duplicates(urls: Sequence[str]) -> list[str]:
    """
    Drop entries equal to their immediate predecessor.

    Non adjacent duplicates are kept: [a, a, b, a] -> [a, b, a].
    """
    result: list[str] = []
    for url in urls:
        if result and result[-1] == url:
            continue
        result.append(url)
    return result


def filter_reverse(urls: Sequence[str]) -> list[str]:
    """Reverse the listing, feeds are newest first and downloads oldest first."""
    return list(reversed(urls))


def filter_audio(urls: Sequence[str], extension: str = AUDIO_EXTENSION) -> list[str]:
    """Keep only urls ending with the audio extension."""
    return [url for url in urls if url.endswith(extension)]


def filter_after_cursor(urls: Sequence[str], cursor: Optional[str]) -> list[str]:
    """
    Keep the entries following the last one whose local name is the cursor.

    Without a cursor, or when the cursor is not in the listing, everything
    is kept.
    """
    if not cursor:
        return list(urls)

    start = 0
    for index, url in enumerate(urls):
        if local_filename(url) == cursor:
            start = index + 1
    return list(urls[start:])


def apply_filters(urls: Sequence[str], cursor: Optional[str] = None) -> list[str]:
    """Run the full filter chain on a raw listing."""
    urls = filter_out_duplicates(urls)
    urls = filter_reverse(urls)
    urls = filter_audio(urls)
    return filter_after_cursor(urls, cursor)
