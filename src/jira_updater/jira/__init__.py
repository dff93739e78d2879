"""JIRA REST client and the command flows built on it."""

from jira_updater.jira.client import ApiResult, JiraClient, build_jql
from jira_updater.jira.models import Attachment, Issue, SearchResult, UpdateRequest

__all__ = [
    "ApiResult",
    "Attachment",
    "Issue",
    "JiraClient",
    "SearchResult",
    "UpdateRequest",
    "build_jql",
]
