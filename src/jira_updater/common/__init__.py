"""Core utilities for jira-updater."""

from jira_updater.common.config import AppConfig, JiraConfig
from jira_updater.common.errors import (
    APIError,
    ConfigurationError,
    IssueNotFoundError,
    JiraUpdaterError,
    ValidationError,
)
from jira_updater.common.logging import setup_logging

__all__ = [
    "AppConfig",
    "JiraConfig",
    "JiraUpdaterError",
    "ConfigurationError",
    "APIError",
    "IssueNotFoundError",
    "ValidationError",
    "setup_logging",
]
