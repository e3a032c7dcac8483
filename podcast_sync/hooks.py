"""
Download hooks.

A hook is a user supplied action run around each download. The pipeline
only sees the callback interfaces below; the configured shell commands are
wrapped into callbacks by build_hooks().

Shell commands receive their bindings through the child environment:
    - PODCAST_FEED: feed identifier
    - PODCAST_FILE: path to the file that has just been downloaded (post hook)
    - PODCAST_URL: url about to be downloaded (pre hook)
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Optional

from .config import Settings


# (feed_id, path) -> None, called after each new file
PostDownloadHook = Callable[[str, Path], None]

# (feed_id, url) -> True to download, False to skip
PreDownloadHook = Callable[[str, str], bool]

logger = logging.getLogger("podcast_sync.hooks")


def _run_shell(command: str, bindings: dict[str, str]) -> Optional[int]:
    """Run command with extra environment bindings, return its exit status."""
    env = dict(os.environ)
    env.update(bindings)
    try:
        completed = subprocess.run(command, shell=True, env=env, check=False)
    except OSError as e:
        logger.error(f"Could not run hook '{command}': {e}")
        return None
    return completed.returncode


class ShellPostHook:
    """Run a shell command after each download, ignoring its exit status."""

    def __init__(self, command: str):
        self.command = command

    def __call__(self, feed_id: str, path: Path) -> None:
        status = _run_shell(
            self.command, {"PODCAST_FEED": feed_id, "PODCAST_FILE": str(path)}
        )
        logger.debug(f"Post hook for {path} exited with {status}")


class ShellPreHook:
    """
    Run a shell command before each download and use it as a gate.

    Exit status 0 allows the download, anything else skips the url. A hook
    that cannot be started allows the download.
    """

    def __init__(self, command: str):
        self.command = command

    def __call__(self, feed_id: str, url: str) -> bool:
        status = _run_shell(
            self.command, {"PODCAST_FEED": feed_id, "PODCAST_URL": url}
        )
        logger.debug(f"Pre hook for {url} exited with {status}")
        return status is None or status == 0


def build_hooks(
    settings: Settings,
) -> tuple[Optional[PreDownloadHook], Optional[PostDownloadHook]]:
    """Wrap the configured hook commands, None where nothing is configured."""
    pre_hook = ShellPreHook(settings.pre_hook) if settings.pre_hook else None
    post_hook = ShellPostHook(settings.hook) if settings.hook else None
    return pre_hook, post_hook
