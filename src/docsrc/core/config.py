"""Configuration management for docsrc."""

import os
import tomllib
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from .exceptions import ConfigError


@dataclass
class FetchConfig:
    """Provider fetch configuration."""

    timeout: float = 30.0
    # Upper bound on concurrent file content requests within one fetch
    max_concurrency: int = 4
    user_agent: str = "docsrc/1.0"
    # Commits older than this mark a directory as having no recent commits
    expires_after_days: int = 2 * 365

    @property
    def expires_after(self) -> timedelta:
        """Staleness window as a timedelta."""
        return timedelta(days=self.expires_after_days)


@dataclass
class Config:
    """Main application configuration."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Returns:
            Config instance.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config {path}: {e}") from e

        config = cls()
        if level := data.get("log_level"):
            config.log_level = str(level)

        fetch = data.get("fetch", {})
        if not isinstance(fetch, dict):
            raise ConfigError(f"[fetch] in {path} must be a table")
        try:
            if "timeout" in fetch:
                config.fetch.timeout = float(fetch["timeout"])
            if "max_concurrency" in fetch:
                config.fetch.max_concurrency = int(fetch["max_concurrency"])
            if "user_agent" in fetch:
                config.fetch.user_agent = str(fetch["user_agent"])
            if "expires_after_days" in fetch:
                config.fetch.expires_after_days = int(fetch["expires_after_days"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid [fetch] value in {path}: {e}") from e

        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls) -> "Config":
        """Load from ``DOCSRC_CONFIG`` when set, otherwise from the environment."""
        if path := os.environ.get("DOCSRC_CONFIG"):
            return cls.from_file(Path(path))
        return cls.from_env()

    def _apply_env(self) -> None:
        try:
            if timeout := os.environ.get("DOCSRC_TIMEOUT"):
                self.fetch.timeout = float(timeout)
            if concurrency := os.environ.get("DOCSRC_MAX_CONCURRENCY"):
                self.fetch.max_concurrency = int(concurrency)
            if days := os.environ.get("DOCSRC_EXPIRES_AFTER_DAYS"):
                self.fetch.expires_after_days = int(days)
        except ValueError as e:
            raise ConfigError(f"Invalid environment override: {e}") from e

        if user_agent := os.environ.get("DOCSRC_USER_AGENT"):
            self.fetch.user_agent = user_agent
        if level := os.environ.get("DOCSRC_LOG_LEVEL"):
            self.log_level = level
