"""
Feed orchestration.

Runs every configured feed through cursor, listing, filters, download and
retention, one feed at a time.
"""

import logging
from typing import Optional

from podcast_sync.config import Feed, Settings
from podcast_sync.hooks import PostDownloadHook, PreDownloadHook, build_hooks
from podcast_sync.logger import log_function
from podcast_sync.ingestion import (
    apply_filters,
    download_feed,
    fetch_listing,
    find_cursor,
)
from podcast_sync.storage import LocalStorage, remove_excess_files


STAT_KEYS = ("downloaded", "skipped", "failed", "vetoed", "removed")

logger = logging.getLogger("podcast_sync.pipeline")


@log_function(logger_name="podcast_sync.pipeline")
def update_feed(
    feed: Feed,
    pre_hook: Optional[PreDownloadHook] = None,
    post_hook: Optional[PostDownloadHook] = None,
    dry_run: bool = False,
) -> dict[str, int]:
    """
    Synchronize one feed with its directory.

    The cursor is read before anything is downloaded, then the listing goes
    through the filters, the downloader and finally the quota enforcement.

    Args:
        feed: Feed to update.
        pre_hook: Optional download gate.
        post_hook: Optional action run on each new file.
        dry_run: If True, report the changes without making them.

    Returns:
        Dictionary with download statistics and the number of removed files.
    """
    print(f"Updating feed {feed.name}...")
    logger.info(f"Updating feed {feed.identifier} into {feed.directory}")

    if not dry_run:
        LocalStorage(feed.directory).ensure_directory()

    cursor = find_cursor(feed.directory)
    urls = apply_filters(fetch_listing(feed.url), cursor)
    logger.info(f"{len(urls)} candidate urls for {feed.identifier} after cursor {cursor!r}")

    stats = download_feed(
        feed, urls, pre_hook=pre_hook, post_hook=post_hook, dry_run=dry_run
    )
    removed = remove_excess_files(feed.directory, feed.max_size_mb, dry_run=dry_run)
    stats["removed"] = len(removed)

    logger.info(f"Feed {feed.identifier} updated: {stats}")
    return stats


@log_function(logger_name="podcast_sync.pipeline")
def update_feeds(settings: Settings, dry_run: bool = False) -> dict[str, int]:
    """
    Update every configured feed, one after the other, in declaration order.

    A feed raising an unexpected error is logged and counted, the next
    feeds still run.

    Returns:
        Dictionary with statistics summed over the feeds, plus:
        - feeds: Number of feeds processed
        - errors: Number of feeds that stopped on an error
    """
    pre_hook, post_hook = build_hooks(settings)
    totals = {key: 0 for key in STAT_KEYS}
    totals["feeds"] = 0
    totals["errors"] = 0

    for feed in settings.feeds:
        try:
            stats = update_feed(
                feed, pre_hook=pre_hook, post_hook=post_hook, dry_run=dry_run
            )
        except Exception as e:
            print(f"  ✗ Feed {feed.name} failed: {e}")
            logger.error(f"Feed {feed.identifier} failed: {e}")
            totals["errors"] += 1
            continue

        totals["feeds"] += 1
        for key in STAT_KEYS:
            totals[key] += stats.get(key, 0)

    return totals
