"""JIRA REST client with HTTP Basic authentication."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests
from requests.auth import HTTPBasicAuth

from jira_updater.common.errors import APIError
from jira_updater.jira.models import Issue, SearchResult

if TYPE_CHECKING:
    from pathlib import Path

    from jira_updater.jira.models import UpdateRequest

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "/rest/api/2/search"
EXACT_MATCH_FIELD = "key"


def build_jql(field: str, value: str) -> str:
    """Build a JQL expression for a single field.

    ``key`` is matched exactly, every other field with the contains operator.
    ``value`` is expected to be escaped for a query string already.

    Example:
        >>> build_jql("key", "JIRA-123")
        'key=JIRA-123'
        >>> build_jql('"Legacy%20Row%20No"', "M1-048")
        '"Legacy%20Row%20No"~M1-048'
    """
    operator = "=" if field == EXACT_MATCH_FIELD else "~"
    return f"{field}{operator}{value}"


@dataclass
class ApiResult:
    """Outcome of a single JIRA request.

    A non-success status is not an exception: ``ok`` is False and the
    status code and body are kept for reporting.
    """

    ok: bool
    status_code: int
    data: Any = None
    text: str = ""

    @classmethod
    def failure(cls, response: requests.Response) -> ApiResult:
        return cls(ok=False, status_code=response.status_code, text=response.text or "")

    def describe_error(self) -> str:
        return f"Error: {self.status_code}\n{self.text}"


class JiraClient:
    """Client for the handful of JIRA REST calls the tool needs.

    The client only holds connection settings; every call returns its
    result instead of keeping it on the instance.
    """

    DOWNLOAD_CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: float | None = None,
        verify_ssl: bool = True,
    ):
        """Initialize the JIRA client.

        Args:
            base_url: JIRA instance URL (e.g., https://jira.example.com)
            username: Username for HTTP Basic authentication
            password: Password for HTTP Basic authentication
            timeout: Request timeout in seconds (None waits indefinitely)
            verify_ssl: Whether to verify SSL certificates
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        self._session = requests.Session()
        self._session.auth = HTTPBasicAuth(username, password)
        self._session.headers.update({"Accept": "application/json"})
        self._session.verify = verify_ssl

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request, wrapping transport failures in APIError."""
        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(method=method, url=url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request failed: {e}") from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _parse_json(response: requests.Response) -> dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON in response from {response.url}: {e}") from e

    def search_url(self, jql: str) -> str:
        # jql is appended verbatim; the caller supplies query-string-safe values
        return f"{self.base_url}{SEARCH_ENDPOINT}?jql={jql}"

    def search(self, field: str, value: str) -> ApiResult:
        """Search for issues where ``field`` matches ``value``.

        Args:
            field: Field name to search with (``key`` for an exact match)
            value: Field value, already escaped for a query string

        Returns:
            ApiResult whose ``data`` is a SearchResult on HTTP 200
        """
        jql = build_jql(field, value)
        response = self._request("GET", self.search_url(jql))
        if response.status_code != 200:
            return ApiResult.failure(response)
        return ApiResult(ok=True, status_code=200, data=SearchResult.from_dict(jql, self._parse_json(response)))

    def get_issue(self, uri: str) -> ApiResult:
        """Fetch a single issue by its self URI.

        Returns:
            ApiResult whose ``data`` is an Issue on HTTP 200
        """
        response = self._request("GET", uri)
        if response.status_code != 200:
            return ApiResult.failure(response)
        return ApiResult(ok=True, status_code=200, data=Issue.from_dict(self._parse_json(response)))

    def update_issue(self, update: UpdateRequest) -> ApiResult:
        """PUT a reduced issue record back to its self URI.

        Only HTTP 204 counts as success.
        """
        response = self._request("PUT", update.self_uri, json=update.payload)
        if response.status_code != 204:
            return ApiResult.failure(response)
        return ApiResult(ok=True, status_code=204)

    def download_attachment(self, content_uri: str, destination: Path) -> ApiResult:
        """Stream an attachment's content into ``destination``.

        The file is opened (and truncated) before the request is sent and is
        closed on every path, so a failed download leaves an empty or partial
        file behind.

        Returns:
            ApiResult whose ``data`` is the number of bytes written on HTTP 200
        """
        with destination.open("wb") as fh:
            response = self._request("GET", content_uri, stream=True, headers={"Accept": "*/*"})
            try:
                if response.status_code != 200:
                    return ApiResult.failure(response)
                written = 0
                for chunk in response.iter_content(chunk_size=self.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
                        written += len(chunk)
                return ApiResult(ok=True, status_code=200, data=written)
            finally:
                response.close()
