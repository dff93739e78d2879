"""Search, update and download attachments from JIRA issues."""

__version__ = "0.1.0"

from jira_updater.common import (
    APIError,
    AppConfig,
    ConfigurationError,
    IssueNotFoundError,
    JiraUpdaterError,
    ValidationError,
    setup_logging,
)

__all__ = [
    "__version__",
    "APIError",
    "AppConfig",
    "ConfigurationError",
    "IssueNotFoundError",
    "JiraUpdaterError",
    "ValidationError",
    "setup_logging",
]
