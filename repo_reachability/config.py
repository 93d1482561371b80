"""Runtime settings for the repository reachability service."""

import os
import logging
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "IndieGameHub-App"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Settings read from the environment."""
    api_url: str
    user_agent: str
    timeout: float
    log_level: str


def _read_timeout() -> float:
    raw = os.environ.get("GITHUB_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid GITHUB_TIMEOUT value: {raw!r}")
        return DEFAULT_TIMEOUT
    if value <= 0:
        logger.warning(f"GITHUB_TIMEOUT must be positive, got {raw!r}")
        return DEFAULT_TIMEOUT
    return value


@lru_cache()
def get_settings() -> Settings:
    """
    Builds settings from environment variables.

    GITHUB_API_URL, GITHUB_USER_AGENT, GITHUB_TIMEOUT and LOG_LEVEL are optional.
    Access tokens are never read here; callers pass them explicitly.

    Returns:
        Cached Settings instance
    """
    settings = Settings(
        api_url=os.environ.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
        user_agent=os.environ.get("GITHUB_USER_AGENT", DEFAULT_USER_AGENT),
        timeout=_read_timeout(),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
    logger.debug(f"Loaded settings: api_url={settings.api_url}, timeout={settings.timeout}s")
    return settings


def clear_settings_cache() -> None:
    """Clears the cached settings (useful for testing)."""
    get_settings.cache_clear()
