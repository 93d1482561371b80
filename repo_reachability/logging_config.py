"""Logging configuration for the repository reachability service."""

import logging
import sys
from typing import Optional

from repo_reachability.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# httpx logs every request line at INFO, including the repository path
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def resolve_level(name: str) -> int:
    """Maps a level name to its logging constant, INFO when unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> int:
    """
    Configures application logging on stdout.

    Args:
        level: Level name overriding the LOG_LEVEL setting

    Returns:
        The level applied to the root logger
    """
    log_level = resolve_level(level or get_settings().log_level)
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    return log_level


def get_logger(name: str) -> logging.Logger:
    """Gets a logger for a module."""
    return logging.getLogger(name)
