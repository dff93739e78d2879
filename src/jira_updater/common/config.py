"""Configuration management for jira-updater."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from jira_updater.common.errors import ConfigurationError
from jira_updater.common.logging import resolve_level

_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_timeout(raw: str | None) -> float | None:
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as err:
        raise ConfigurationError(f"JIRA_TIMEOUT must be a number of seconds, got '{raw}'") from err


@dataclass
class JiraConfig:
    """JIRA API configuration."""

    host: str | None
    username: str | None
    password: str | None
    verify_ssl: bool = True
    timeout: float | None = None

    @classmethod
    def from_env(cls) -> JiraConfig:
        """Load configuration from environment variables.

        Expected variables:
            JIRA_URI: JIRA host name (``https://`` is assumed when no scheme is given)
            JIRA_USER: Username for HTTP Basic authentication
            JIRA_PASS: Password for HTTP Basic authentication
            JIRA_VERIFY_SSL: Set to false for self-signed certificates (optional)
            JIRA_TIMEOUT: Request timeout in seconds (optional, no timeout by default)

        Returns:
            JiraConfig instance
        """
        return cls(
            host=os.getenv("JIRA_URI") or None,
            username=os.getenv("JIRA_USER") or None,
            password=os.getenv("JIRA_PASS") or None,
            verify_ssl=os.getenv("JIRA_VERIFY_SSL", "true").strip().lower() not in _FALSE_VALUES,
            timeout=_parse_timeout(os.getenv("JIRA_TIMEOUT")),
        )

    @property
    def base_url(self) -> str | None:
        """Host as a URL, defaulting to HTTPS."""
        if not self.host:
            return None
        if "://" in self.host:
            return self.host.rstrip("/")
        return f"https://{self.host.rstrip('/')}"

    def validate(self) -> dict[str, str]:
        """Validate configuration.

        Returns:
            Dict of field names to error messages (empty if valid)
        """
        errors = {}
        if not self.host:
            errors["host"] = "JIRA_URI not set"
        if not self.username:
            errors["username"] = "JIRA_USER not set"
        if not self.password:
            errors["password"] = "JIRA_PASS not set"
        return errors


class AppConfig:
    """Main application configuration loader."""

    def __init__(self, env_file: Path | None = None, load_env: bool = True):
        """Initialize configuration from environment.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory or ~/.jira_updater.env
            load_env: Whether to load from .env files (default True). Set False in tests.

        Raises:
            ConfigurationError: If a configured value (timeout, log level) cannot be parsed
        """
        if load_env:
            if env_file and env_file.exists():
                load_dotenv(env_file)
            else:
                for default in [
                    Path(".env"),
                    Path.home() / ".jira_updater.env",
                ]:
                    if default.exists():
                        load_dotenv(default)
                        break

        self.jira = JiraConfig.from_env()
        raw_level = os.getenv("LOG_LEVEL", "INFO")
        try:
            resolve_level(raw_level)
        except ConfigurationError as err:
            raise ConfigurationError(f"LOG_LEVEL: {err}") from err
        self.log_level = raw_level.strip().upper()

    def validate(self, services: list[str] | None = None) -> dict[str, dict[str, str]]:
        """Validate configurations for specified services.

        Args:
            services: List of service names to validate. If None, validates all.
                     Valid names: 'jira'

        Returns:
            Dictionary mapping service names to dicts of field errors
        """
        all_services = {
            "jira": self.jira,
        }

        if services is None:
            services = list(all_services.keys())

        return {service: all_services[service].validate() for service in services if service in all_services}

    def require_valid(self, *services: str) -> None:
        """Require specified services to have valid configuration.

        Args:
            *services: Service names that must be configured

        Raises:
            ConfigurationError: If any specified service has invalid config

        Example:
            >>> config = AppConfig()
            >>> config.require_valid('jira')  # Raises if invalid
        """
        errors = self.validate(list(services))

        all_errors = []
        for service, field_errors in errors.items():
            for field, error_msg in field_errors.items():
                all_errors.append(f"{service}.{field}: {error_msg}")

        if all_errors:
            raise ConfigurationError("Configuration validation failed:\n  - " + "\n  - ".join(all_errors))
