"""
podcast_sync: unattended podcast feed downloader.

Polls the configured feeds, downloads new audio enclosures, runs an optional
hook per downloaded file and prunes old files to respect per-feed quotas.

Usage:
    python -m podcast_sync --update
"""

__version__ = "0.1.0"
