"""Shared fixtures for JIRA tests."""

from unittest.mock import MagicMock

import pytest

from jira_updater.jira.client import JiraClient

BASE_URL = "https://jira.test"
ISSUE_URI = f"{BASE_URL}/rest/api/2/issue/10001"


@pytest.fixture
def make_response():
    """Factory for mocked ``requests.Response`` objects."""

    def _make(status_code=200, json_data=None, text="", chunks=None):
        response = MagicMock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        response.text = text
        response.url = BASE_URL
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        response.iter_content.return_value = chunks or []
        return response

    return _make


@pytest.fixture
def mock_client():
    """Create a JIRA client with a mocked session."""
    client = JiraClient(base_url=BASE_URL, username="jdoe", password="s3cret")
    client._session = MagicMock()
    return client


@pytest.fixture
def sample_issue():
    """Full issue record as returned by GET /rest/api/2/issue/{id}."""
    return {
        "expand": "renderedFields,names,schema",
        "id": "10001",
        "self": ISSUE_URI,
        "key": "JIRA-123",
        "fields": {
            "summary": "Legacy row import",
            "customfield_12775": "42",
            "customfield_12850": None,
            "attachment": [
                {
                    "self": f"{BASE_URL}/rest/api/2/attachment/501",
                    "filename": "report.pdf",
                    "content": f"{BASE_URL}/secure/attachment/501/report.pdf",
                    "size": 7,
                    "mimeType": "application/pdf",
                },
                {
                    "self": f"{BASE_URL}/rest/api/2/attachment/502",
                    "filename": "notes.txt",
                    "content": f"{BASE_URL}/secure/attachment/502/notes.txt",
                    "size": 11,
                    "mimeType": "text/plain",
                },
            ],
        },
    }


@pytest.fixture
def sample_search(sample_issue):
    """Search response containing one issue."""
    return {
        "expand": "names,schema",
        "startAt": 0,
        "maxResults": 50,
        "total": 1,
        "issues": [
            {
                "id": sample_issue["id"],
                "self": sample_issue["self"],
                "key": sample_issue["key"],
                "fields": {"summary": "Legacy row import"},
            }
        ],
    }


@pytest.fixture
def empty_search():
    """Search response with no matches."""
    return {"startAt": 0, "maxResults": 50, "total": 0, "issues": []}
