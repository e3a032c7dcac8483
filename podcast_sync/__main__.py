#!/usr/bin/env python3
"""
CLI interface for podcast_sync.

Meant to be called from cron or a timer without any user interaction.

Usage:
    python -m podcast_sync --update
    python -m podcast_sync --update --config ~/podcast.ini
    python -m podcast_sync --update --dry-run --verbose
"""

import argparse
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from podcast_sync.config import ConfigurationError, find_configuration, load_config
from podcast_sync.logger import setup_logging
from podcast_sync.pipeline import update_feeds


class UsageParser(argparse.ArgumentParser):
    """Argument parser exiting with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="podcast_sync",
        description="Download new podcast episodes and prune old ones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration lookup order:
  ./config.ini, $XDG_CONFIG_HOME/podcast.ini, $XDG_CONFIG_DIRS/podcast.ini,
  ~/.podcast.ini

Examples:
  python -m podcast_sync --update                  # Update all feeds
  python -m podcast_sync --update --dry-run        # Show what would change
  python -m podcast_sync -u -c ~/podcast.ini -v    # Custom config, verbose
        """,
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "-u", "--update", action="store_true", help="Update all configured feeds"
    )
    parser.add_argument(
        "-c", "--config", help="Configuration file (skips the lookup)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be downloaded and removed without changing anything",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Detailed console output"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point: parse the arguments, load the configuration and update the feeds.

    Returns 0 on success, 1 on usage or configuration errors and 130 when
    interrupted by the user. Per feed failures are logged and do not change
    the exit status.
    """
    args = build_parser().parse_args(argv)

    load_dotenv()
    logger = setup_logging(logger_name="podcast_sync", verbose=args.verbose)

    try:
        config_path = find_configuration(args.config)
        settings = load_config(config_path)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        logger.error(f"Configuration error: {e}")
        return 1

    try:
        stats = update_feeds(settings, dry_run=args.dry_run)
    except KeyboardInterrupt:
        print("\nUpdate interrupted by user")
        logger.info("Update interrupted by user")
        return 130

    action = "Would be processed" if args.dry_run else "Update completed"
    print(f"\n{action}:")
    print(f"  Feeds: {stats['feeds']}")
    print(f"  Downloaded: {stats['downloaded']}")
    print(f"  Already existed: {stats['skipped']}")
    print(f"  Refused by hook: {stats['vetoed']}")
    print(f"  Failed: {stats['failed']}")
    print(f"  Removed: {stats['removed']}")
    if stats["errors"]:
        print(f"  Feed errors: {stats['errors']}")

    logger.info(f"Update completed: {stats}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
