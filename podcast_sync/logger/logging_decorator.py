"""
Centralized Logging Utilities and Decorators

Provides the logging setup used by the command line entry point and a
function decorator for consistent logging of the synchronization stages.

Usage:
    from podcast_sync.logger import setup_logging, log_function

    # Setup logging once, from the entry point
    logger = setup_logging(
        logger_name="podcast_sync",
        log_file="logs/podcast_sync.log",
        verbose=True
    )

    # Decorate functions for automatic logging
    @log_function(logger_name="podcast_sync.pipeline")
    def update_feed(feed):
        ...
"""

import functools
import logging
import os
import time
from pathlib import Path
from typing import Optional, Callable, Any


DEFAULT_LOG_FILE = "logs/podcast_sync.log"
LOG_FILE_ENV = "PODCAST_SYNC_LOG_FILE"


def setup_logging(
    logger_name: str = "podcast_sync",
    log_file: Optional[str] = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up logging with file and optional console handlers.

    Args:
        logger_name: Name for the logger (default: "podcast_sync", the root
            of every logger used by the package)
        log_file: Path to log file. If None, reads PODCAST_SYNC_LOG_FILE from
            the environment and falls back to "logs/podcast_sync.log"
        verbose: If True, add console handler with DEBUG level (default: False)
        level: Base logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Avoid adding multiple handlers if already configured
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else level)

    if log_file is None:
        log_file = os.getenv(LOG_FILE_ENV, DEFAULT_LOG_FILE)

    # Create logs directory if needed
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # File handler for detailed logging
    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(level)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # Console handler for verbose mode
    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter("DEBUG: %(message)s")
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    return logger


def log_function(
    logger_name: Optional[str] = None,
    level: int = logging.INFO,
    log_args: bool = False,
    log_result: bool = False,
    log_execution_time: bool = True,
) -> Callable:
    """
    Decorator to automatically log function entry, exit, execution time, and exceptions.

    Handlers are never installed here: records go to whatever setup_logging
    configured, or to the logging defaults when it was never called.

    Args:
        logger_name: Custom logger name (if None, uses the decorated function's module name)
        level: Log level for entry/exit messages (default: logging.INFO)
        log_args: If True, log function arguments (default: False)
        log_result: If True, log return value (default: False)
        log_execution_time: If True, log execution duration (default: True)

    Returns:
        Decorated function with logging

    Example:
        @log_function(logger_name="podcast_sync.download", log_args=True)
        def download_file(url, path):
            ...
    """

    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(logger_name or func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            func_name = func.__name__
            log_msg = f"Calling {func_name}"

            # Optionally log arguments
            if log_args and (args or kwargs):
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                all_args = ", ".join(args_repr + kwargs_repr)
                log_msg += f" with args: {all_args}"

            logger.log(level, log_msg)

            start_time = time.time()

            try:
                result = func(*args, **kwargs)

                execution_time = time.time() - start_time
                completion_msg = f"Completed {func_name}"

                if log_execution_time:
                    completion_msg += f" in {execution_time:.2f}s"

                if log_result:
                    completion_msg += f" with result: {result!r}"

                logger.log(level, completion_msg)

                return result

            except Exception as e:
                # Log exception with execution time
                execution_time = time.time() - start_time
                logger.error(
                    f"Exception in {func_name} after {execution_time:.2f}s: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

        return wrapper

    return decorator
