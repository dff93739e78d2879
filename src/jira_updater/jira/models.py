"""Data types for JIRA issues, search results and attachments."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from jira_updater.common.errors import IssueNotFoundError

ATTACHMENT_FIELD = "attachment"


@dataclass
class Attachment:
    """An attachment listed under an issue's ``attachment`` field."""

    filename: str
    content_uri: str
    size: int | None = None
    mime_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attachment:
        return cls(
            filename=data["filename"],
            content_uri=data["content"],
            size=data.get("size"),
            mime_type=data.get("mimeType"),
        )


@dataclass
class UpdateRequest:
    """PUT payload for a single-field change of one issue."""

    self_uri: str
    payload: dict[str, Any]

    @property
    def fields(self) -> dict[str, Any]:
        return self.payload["fields"]


@dataclass
class Issue:
    """A JIRA issue as returned by the REST API.

    ``fields`` keeps the server's JSON shapes untouched: strings, numbers,
    nested objects and lists all pass through as-is.
    """

    key: str
    self_uri: str
    fields: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        return cls(
            key=data.get("key", ""),
            self_uri=data.get("self", ""),
            fields=data.get("fields") or {},
            raw=data,
        )

    def get_field(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @property
    def attachments(self) -> list[Attachment]:
        return [Attachment.from_dict(item) for item in self.fields.get(ATTACHMENT_FIELD) or []]

    def to_update_request(self, field_name: str, value: Any) -> UpdateRequest:
        """Build an update that touches only ``field_name``.

        Every other field is dropped from the payload so the server leaves
        it unchanged.
        """
        payload = copy.deepcopy(self.raw) if self.raw else {"key": self.key, "self": self.self_uri}
        payload["fields"] = {field_name: value}
        return UpdateRequest(self_uri=self.self_uri, payload=payload)


@dataclass
class SearchResult:
    """Issues matching a JQL query, in server order."""

    jql: str
    issues: list[Issue] = field(default_factory=list)
    total: int = 0
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, jql: str, data: dict[str, Any]) -> SearchResult:
        issues = [Issue.from_dict(item) for item in data.get("issues", [])]
        return cls(jql=jql, issues=issues, total=data.get("total", len(issues)), raw=data)

    def first(self) -> Issue:
        """Return the first matching issue.

        Raises:
            IssueNotFoundError: If the search matched nothing
        """
        if not self.issues:
            raise IssueNotFoundError(self.jql)
        return self.issues[0]
