"""Environment-driven configuration for serverless link scraper."""

import os
from dataclasses import dataclass
from urllib.parse import quote

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_TARGET_URL = "https://example.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 3.0


def _env_str(key: str, default: str | None = None) -> str | None:
    val = os.getenv(key)
    return val.strip() if val and val.strip() else default


def _env_float(key: str, default: float) -> float:
    raw = _env_str(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number", {"value": raw}) from e


def _env_int(key: str, default: int) -> int:
    raw = _env_str(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer", {"value": raw}) from e


@dataclass(frozen=True)
class Config:
    """Settings for one function deployment."""

    target_url: str = DEFAULT_TARGET_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    selector: str = "a"
    proxy_username: str | None = None
    proxy_password: str | None = None
    proxy_host: str | None = None
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Config":
        """
        Build configuration from environment variables.

        Args:
            dotenv: Load a local ``.env`` file first (never overrides real env vars)

        Returns:
            Config instance
        """
        if dotenv:
            load_dotenv()

        return cls(
            target_url=_env_str("TARGET_URL", DEFAULT_TARGET_URL),
            timeout=_env_float("REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
            max_retries=_env_int("MAX_RETRIES", DEFAULT_MAX_RETRIES),
            retry_delay=_env_float("RETRY_DELAY", DEFAULT_RETRY_DELAY),
            selector=_env_str("LINK_SELECTOR", "a"),
            proxy_username=_env_str("PROXY_USERNAME"),
            proxy_password=_env_str("PROXY_PASSWORD"),
            proxy_host=_env_str("PROXY_HOST"),
            log_level=_env_str("LOG_LEVEL", "INFO"),
            log_format=_env_str("LOG_FORMAT", "json").lower(),
        )

    @property
    def proxies(self) -> dict[str, str] | None:
        """Proxy mapping for ``requests``, or None when no proxy host is set."""
        if not self.proxy_host:
            return None

        auth = ""
        if self.proxy_username:
            auth = quote(self.proxy_username, safe="")
            if self.proxy_password:
                auth += ":" + quote(self.proxy_password, safe="")
            auth += "@"

        proxy_url = f"http://{auth}{self.proxy_host}"
        return {"http": proxy_url, "https": proxy_url}
