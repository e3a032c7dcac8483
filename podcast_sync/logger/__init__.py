"""Logging utilities for podcast_sync."""

from .logging_decorator import setup_logging, log_function, DEFAULT_LOG_FILE

__all__ = ["setup_logging", "log_function", "DEFAULT_LOG_FILE"]
