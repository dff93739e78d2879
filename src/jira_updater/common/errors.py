"""Custom exceptions for jira-updater."""


class JiraUpdaterError(Exception):
    """Base exception for all jira-updater errors."""

    pass


class ConfigurationError(JiraUpdaterError):
    """Raised when configuration is invalid or missing."""

    pass


class APIError(JiraUpdaterError):
    """Raised when a request to JIRA could not be completed."""

    pass


class IssueNotFoundError(APIError):
    """Raised when a search matched no issues."""

    def __init__(self, jql: str):
        super().__init__(f"No issue found matching '{jql}'")
        self.jql = jql


class ValidationError(JiraUpdaterError):
    """Raised when input data validation fails."""

    pass
