"""Global configuration — environment variables and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from gitpatrol import __version__

_TRUTHY = {"1", "true", "yes", "on"}


def _default_user_agent() -> str:
    return f"GitPatrol/{__version__}"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class GitPatrolConfig:
    """Application-wide configuration."""

    github_token: str | None = None
    api_url: str = "https://api.github.com"
    user_agent: str = field(default_factory=_default_user_agent)
    request_timeout: float = 30.0
    queue_size: int = 32
    strict_listing: bool = False
    lock_timeout: float = 30.0
    web_host: str = "127.0.0.1"
    web_port: int = 8471

    @classmethod
    def load(cls) -> GitPatrolConfig:
        """Load config from environment variables."""
        config = cls()

        token = os.environ.get("GITHUB_TOKEN")
        if token:
            config.github_token = token.strip()

        api_url = os.environ.get("GITPATROL_API_URL")
        if api_url:
            config.api_url = api_url.rstrip("/")

        config.request_timeout = _env_float(
            "GITPATROL_TIMEOUT", config.request_timeout
        )
        config.queue_size = _env_int("GITPATROL_QUEUE_SIZE", config.queue_size)
        if config.queue_size < 1:
            raise ValueError("GITPATROL_QUEUE_SIZE must be at least 1")

        strict = os.environ.get("GITPATROL_STRICT_LISTING", "")
        config.strict_listing = strict.strip().lower() in _TRUTHY

        config.web_port = _env_int("GITPATROL_WEB_PORT", config.web_port)

        return config
