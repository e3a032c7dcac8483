"""
Configuration settings for podcast_sync.

The configuration is an INI file with a [global] section and one section
per feed:

    [global]
    media = /home/user/media/podcast
    default_max_size_mb = 100
    feeds = feed1 feed2
    hook = logger "podcast_sync: downloaded ${PODCAST_FILE}"

    [feed1]
    url  = http://example.org/feed1
    name = Feed 1
    directory = feed_1
    max_size_mb = 150

    [feed2]
    url = http://example.org/feed2

The only mandatory feed option is the url, the other options are inferred
from the feed identifier or from the global options.
"""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


CONFIG_FILENAME = "podcast.ini"
DEVELOPMENT_CONFIG = "config.ini"
HOME_CONFIG = "~/.podcast.ini"
GLOBAL_SECTION = "global"

logger = logging.getLogger("podcast_sync.config")


class ConfigurationError(Exception):
    """Raised when no usable configuration can be built."""


@dataclass(frozen=True)
class Feed:
    """A configured feed with its resolved storage policy."""

    identifier: str
    name: str
    directory: Path
    url: str
    max_size_mb: Optional[float] = None


@dataclass(frozen=True)
class Settings:
    """Immutable run configuration, built once at startup."""

    source: Path
    media: Optional[Path] = None
    default_max_size_mb: Optional[float] = None
    hook: Optional[str] = None
    pre_hook: Optional[str] = None
    feeds: tuple[Feed, ...] = ()


def candidate_paths() -> list[Path]:
    """
    List configuration file locations in lookup order.

    Development location first, then the XDG base directories, then the
    fixed file in the home directory.
    """
    candidates = [Path(DEVELOPMENT_CONFIG)]

    config_home = os.getenv("XDG_CONFIG_HOME") or "~/.config"
    candidates.append(Path(config_home).expanduser() / CONFIG_FILENAME)

    config_dirs = os.getenv("XDG_CONFIG_DIRS") or "/etc/xdg"
    for directory in config_dirs.split(":"):
        if directory:
            candidates.append(Path(directory).expanduser() / CONFIG_FILENAME)

    candidates.append(Path(HOME_CONFIG).expanduser())
    return candidates


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def find_configuration(explicit: Optional[str] = None) -> Path:
    """
    Locate the configuration file.

    Args:
        explicit: Path given on the command line. When set, no other
            location is searched.

    Returns:
        Path of the first readable configuration file.

    Raises:
        ConfigurationError: If no readable configuration file is found.
    """
    if explicit:
        path = Path(explicit).expanduser()
        if not _is_readable(path):
            raise ConfigurationError(f"Configuration file not readable: {path}")
        return path

    for path in candidate_paths():
        if _is_readable(path):
            logger.debug(f"Using configuration file {path}")
            return path
        logger.debug(f"No configuration at {path}")

    raise ConfigurationError("Configuration file not found")


def _parse_size(value: Optional[str], where: str) -> Optional[float]:
    """Parse a quota in megabytes, empty meaning unset."""
    if value is None or not value.strip():
        return None
    try:
        size = float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid size '{value}' in {where}")
    if size < 0:
        raise ConfigurationError(f"Negative size '{value}' in {where}")
    return size


def _read_value(parser: configparser.ConfigParser, section: str, key: str) -> Optional[str]:
    """Return a stripped value, treating empty strings as missing."""
    if not parser.has_section(section):
        return None
    value = parser.get(section, key, fallback=None)
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_feed(
    parser: configparser.ConfigParser,
    identifier: str,
    media: Optional[Path],
    default_max_size_mb: Optional[float],
) -> Optional[Feed]:
    """
    Build a Feed from its section, inheriting missing values.

    Returns:
        The resolved Feed, or None when the feed has no url.

    Raises:
        ConfigurationError: If the feed has an invalid quota or no directory.
    """
    url = _read_value(parser, identifier, "url")
    if url is None:
        logger.warning(f"Feed '{identifier}' has no url, skipping it")
        return None

    name = _read_value(parser, identifier, "name") or identifier

    directory_value = _read_value(parser, identifier, "directory") or _read_value(
        parser, identifier, "dir"
    )
    if directory_value is not None:
        directory = Path(directory_value).expanduser()
        if not directory.is_absolute():
            if media is None:
                raise ConfigurationError(
                    f"Feed '{identifier}' uses a relative directory but no media root is set"
                )
            directory = media / directory
    else:
        if media is None:
            raise ConfigurationError(
                f"Feed '{identifier}' has no directory and no media root is set"
            )
        directory = media / identifier

    max_size_mb = _parse_size(
        _read_value(parser, identifier, "max_size_mb"), f"[{identifier}] max_size_mb"
    )
    if max_size_mb is None:
        max_size_mb = default_max_size_mb

    return Feed(
        identifier=identifier,
        name=name,
        directory=directory,
        url=url,
        max_size_mb=max_size_mb,
    )


def load_config(path: Path) -> Settings:
    """
    Read the configuration file and resolve every declared feed.

    Args:
        path: Configuration file to read.

    Returns:
        Settings with feeds in the order of the global `feeds` key. Feeds
        that cannot be resolved are logged and left out.

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid
            global values.
    """
    # No interpolation: hook commands carry shell syntax such as ${PODCAST_FILE}
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        raise ConfigurationError(f"Could not read configuration {path}: {e}")

    media_value = _read_value(parser, GLOBAL_SECTION, "media")
    media = Path(media_value).expanduser() if media_value else None
    default_max_size_mb = _parse_size(
        _read_value(parser, GLOBAL_SECTION, "default_max_size_mb"),
        "[global] default_max_size_mb",
    )

    feeds = []
    for identifier in (_read_value(parser, GLOBAL_SECTION, "feeds") or "").split():
        try:
            feed = resolve_feed(parser, identifier, media, default_max_size_mb)
        except ConfigurationError as e:
            logger.warning(f"Skipping feed '{identifier}': {e}")
            continue
        if feed is not None:
            feeds.append(feed)

    settings = Settings(
        source=Path(path),
        media=media,
        default_max_size_mb=default_max_size_mb,
        hook=_read_value(parser, GLOBAL_SECTION, "hook"),
        pre_hook=_read_value(parser, GLOBAL_SECTION, "pre_hook"),
        feeds=tuple(feeds),
    )
    logger.info(f"Loaded {len(settings.feeds)} feeds from {path}")
    return settings
