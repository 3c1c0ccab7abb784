"""Configuration module for Tempo API interactions."""

import logging
import os
from dataclasses import dataclass

from ..utils.logging import log_config_param

logger = logging.getLogger("mcp-tempo.tempo.config")

DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_HOURS_PER_DAY = 8


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() not in ("false", "0", "no")


def _env_number(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        error_msg = f"{name} must be a number, got '{value}'"
        raise ValueError(error_msg) from e


@dataclass
class TempoConfig:
    """Tempo API configuration.

    Targets a Jira Server/Data Center instance with Tempo Timesheets installed,
    authenticated with a personal access token sent as a bearer credential.
    """

    url: str  # Base URL of the Jira instance hosting Tempo
    personal_token: str  # Personal access token
    timeout: float = DEFAULT_TIMEOUT  # Request timeout in seconds
    default_hours: float = DEFAULT_HOURS_PER_DAY  # Hours in a regular workday
    ssl_verify: bool = True  # Whether to verify SSL certificates
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL
    no_proxy: str | None = None  # Comma-separated list of hosts to bypass proxy

    @property
    def proxies(self) -> dict[str, str]:
        """Proxy mapping in the form ``requests`` expects."""
        proxies = {}
        if self.http_proxy:
            proxies["http"] = self.http_proxy
        if self.https_proxy:
            proxies["https"] = self.https_proxy
        if self.no_proxy:
            proxies["no_proxy"] = self.no_proxy
        return proxies

    @classmethod
    def from_env(cls) -> "TempoConfig":
        """Create configuration from environment variables.

        Returns:
            TempoConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = os.getenv("TEMPO_BASE_URL")
        if not url:
            error_msg = "Missing required TEMPO_BASE_URL environment variable"
            raise ValueError(error_msg)

        personal_token = os.getenv("TEMPO_PAT")
        if not personal_token:
            error_msg = "Missing required TEMPO_PAT environment variable"
            raise ValueError(error_msg)

        timeout = _env_number("TEMPO_TIMEOUT", DEFAULT_TIMEOUT)
        if timeout <= 0:
            error_msg = "TEMPO_TIMEOUT must be positive"
            raise ValueError(error_msg)

        config = cls(
            url=url.rstrip("/"),
            personal_token=personal_token,
            timeout=timeout,
            default_hours=_env_number("TEMPO_DEFAULT_HOURS", DEFAULT_HOURS_PER_DAY),
            ssl_verify=_env_bool("TEMPO_SSL_VERIFY", True),
            http_proxy=os.getenv("TEMPO_HTTP_PROXY", os.getenv("HTTP_PROXY")),
            https_proxy=os.getenv("TEMPO_HTTPS_PROXY", os.getenv("HTTPS_PROXY")),
            no_proxy=os.getenv("TEMPO_NO_PROXY", os.getenv("NO_PROXY")),
        )
        config.log_settings()
        return config

    def is_auth_configured(self) -> bool:
        """Check if the configuration carries everything needed for API calls."""
        return bool(self.url and self.personal_token)

    def log_settings(self) -> None:
        log_config_param(logger, "URL", self.url)
        log_config_param(logger, "personal token", self.personal_token, sensitive=True)
        log_config_param(logger, "timeout", str(self.timeout))
        log_config_param(logger, "SSL verify", str(self.ssl_verify))
        if self.proxies:
            log_config_param(logger, "proxies", ", ".join(self.proxies.values()))
