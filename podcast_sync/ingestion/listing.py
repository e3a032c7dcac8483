"""
Feed listing fetcher.

The feed document is not parsed: every url="..." attribute found in the raw
text is a candidate, so RSS, Atom or a truncated document all work.
"""

import logging
import re

import requests

from podcast_sync.logger import log_function


URL_ATTRIBUTE = re.compile(r'url="([^"]*)')

logger = logging.getLogger("podcast_sync.listing")


def extract_urls(text: str) -> list[str]:
    """Return every url attribute value of text, in document order."""
    return URL_ATTRIBUTE.findall(text)


@log_function(logger_name="podcast_sync.listing")
def fetch_listing(url: str, timeout: int = 30) -> list[str]:
    """
    Fetch a feed and extract its candidate media urls.

    Args:
        url: Feed url.
        timeout: Request timeout in seconds.

    Returns:
        Candidate urls in document order, duplicates included. Empty when
        the feed cannot be fetched.
    """
    logger.info(f"Fetching feed from {url}...")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error fetching feed {url}: {e}")
        return []

    # Decoded as UTF-8 regardless of the Content-Type charset
    urls = extract_urls(response.content.decode("utf-8", errors="replace"))
    logger.info(f"Found {len(urls)} urls in {url}")
    return urls
