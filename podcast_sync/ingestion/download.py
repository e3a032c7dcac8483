"""
Enclosure downloader.

Downloads the filtered urls of a feed, oldest first, so that modification
times follow the feed chronology. A url is skipped when a file with its
name already exists in the feed directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence

import requests

from podcast_sync.config import Feed
from podcast_sync.hooks import PostDownloadHook, PreDownloadHook
from podcast_sync.logger import log_function
from podcast_sync.storage import LocalStorage
from .filters import local_filename


# Browser headers, some podcast hosts redirect or refuse bare clients
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Accept": "audio/mpeg, audio/*, */*",
    "Accept-Language": "en-US,en;q=0.9",
}

CHUNK_SIZE = 8192

logger = logging.getLogger("podcast_sync.download")


def download_file(url: str, path: Path, timeout: int = 120) -> bool:
    """
    Stream url to path.

    Args:
        url: File url.
        path: Destination file.
        timeout: Request timeout in seconds.

    Returns:
        bool: True on success. On failure or interruption the partial file
        is removed.
    """
    try:
        response = requests.get(url, stream=True, headers=HEADERS, timeout=timeout)
        response.raise_for_status()

        # Write file in chunks
        with open(path, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        logger.warning(f"Download failed for {url}: {e}")
        if os.path.exists(path):
            os.remove(path)
        return False
    except BaseException:
        # A partial file would pass the existence check on the next run
        if os.path.exists(path):
            os.remove(path)
        raise

    logger.info(f"Downloaded {path} ({os.path.getsize(path):,} bytes)")
    return True


@log_function(logger_name="podcast_sync.download")
def download_feed(
    feed: Feed,
    urls: Sequence[str],
    pre_hook: Optional[PreDownloadHook] = None,
    post_hook: Optional[PostDownloadHook] = None,
    dry_run: bool = False,
) -> dict[str, int]:
    """
    Download the urls of a feed that are not present locally.

    A failed download does not stop the remaining urls.

    Args:
        feed: Feed the urls belong to.
        urls: Filtered urls, oldest first.
        pre_hook: Optional gate called before each download.
        post_hook: Optional action called after each successful download.
        dry_run: If True, only print what would be downloaded.

    Returns:
        Dictionary with statistics:
        - downloaded: Number of new files
        - skipped: Number of urls already present locally
        - failed: Number of failed downloads
        - vetoed: Number of urls refused by the pre hook
    """
    storage = LocalStorage(feed.directory)
    stats = {"downloaded": 0, "skipped": 0, "failed": 0, "vetoed": 0}

    for url in urls:
        filename = local_filename(url)
        if storage.file_exist(filename):
            logger.debug(f"{filename} already downloaded")
            stats["skipped"] += 1
            continue

        if pre_hook is not None and not pre_hook(feed.identifier, url):
            logger.info(f"Pre hook refused {url}")
            stats["vetoed"] += 1
            continue

        if dry_run:
            print(f"  +{filename} (dry run)")
            stats["downloaded"] += 1
            continue

        print(f"  +{filename}")
        path = feed.directory / filename
        if not download_file(url, path):
            print(f"  ✗ {filename} failed")
            stats["failed"] += 1
            continue

        stats["downloaded"] += 1
        if post_hook is not None:
            try:
                post_hook(feed.identifier, path)
            except Exception as e:
                logger.error(f"Post hook failed for {path}: {e}")

    return stats
