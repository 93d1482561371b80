"""Tests for environment settings."""

import logging

import pytest
from repo_reachability.config import get_settings, clear_settings_cache, DEFAULT_TIMEOUT
from repo_reachability.logging_config import resolve_level, setup_logging
from repo_reachability.tools.github_checker import GitHubRepoChecker


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Clears cached settings and GitHub env vars around each test."""
    for name in ("GITHUB_API_URL", "GITHUB_USER_AGENT", "GITHUB_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSettings:
    """Tests for get_settings."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.api_url == "https://api.github.com"
        assert settings.user_agent == "IndieGameHub-App"
        assert settings.timeout == 10.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        monkeypatch.setenv("GITHUB_USER_AGENT", "test-agent")
        monkeypatch.setenv("GITHUB_TIMEOUT", "2.5")

        settings = get_settings()
        assert settings.api_url == "https://ghe.example.com/api/v3"
        assert settings.user_agent == "test-agent"
        assert settings.timeout == 2.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_bad_timeout_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("GITHUB_TIMEOUT", raw)
        assert get_settings().timeout == DEFAULT_TIMEOUT

    def test_settings_are_cached(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("GITHUB_USER_AGENT", "changed")
        assert get_settings() is first

    def test_checker_uses_settings(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")
        checker = GitHubRepoChecker()
        assert checker.base_url == "https://ghe.example.com/api/v3"
        assert checker.timeout == 10.0


class TestLoggingSetup:
    """Tests for setup_logging."""

    @pytest.mark.parametrize("name, level", [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("verbose", logging.INFO),
    ])
    def test_resolve_level(self, name, level):
        assert resolve_level(name) == level

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert setup_logging() == logging.ERROR
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert setup_logging("debug") == logging.DEBUG
        assert logging.getLogger("httpcore").level == logging.WARNING
