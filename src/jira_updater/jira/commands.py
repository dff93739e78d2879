"""Command flows built from the JIRA client's search, fetch and update calls.

Every flow takes the client explicitly and reports failures on the console.
Non-success HTTP statuses never raise; the flows return a sentinel
(``None``, ``False`` or an empty list) instead.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from jira_updater.common.errors import APIError, IssueNotFoundError, ValidationError
from jira_updater.jira.client import ApiResult, JiraClient
from jira_updater.jira.models import Issue, SearchResult

logger = logging.getLogger(__name__)
console = Console(soft_wrap=True)

ROW_NUMBER_FIELD = "customfield_12775"
CFACTS_FIELD = "customfield_12850"
BULK_COLUMNS = 4
UNSAFE_NAMES = {"", ".", ".."}


def _display(value: Any) -> str:
    return "" if value is None else str(value)


def report_failure(result: ApiResult) -> None:
    """Print the status code and body of a failed request."""
    console.print(f"[red]Error:[/red] {result.status_code}")
    if result.text:
        console.print(escape(result.text))


def fetch_first(client: JiraClient, search: SearchResult) -> Issue | None:
    """Fetch the full record of the first search match.

    Returns:
        The issue, or None when nothing matched or the fetch failed
    """
    try:
        match = search.first()
    except IssueNotFoundError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        return None

    fetched = client.get_issue(match.self_uri)
    if not fetched.ok:
        report_failure(fetched)
        return None
    return fetched.data


def locate_issue(client: JiraClient, search_field: str, search_value: str) -> Issue | None:
    """Search for an issue and fetch its full record.

    Returns:
        The first matching issue, or None when the search or fetch failed
        or nothing matched
    """
    search = client.search(search_field, search_value)
    if not search.ok:
        report_failure(search)
        return None
    return fetch_first(client, search.data)


def find_issue(
    client: JiraClient,
    search_field: str,
    search_value: str,
    output_json: bool = False,
) -> SearchResult | None:
    """Search for an issue, fetch the first match and display its key fields."""
    result = client.search(search_field, search_value)
    if not result.ok:
        report_failure(result)
        return None

    search: SearchResult = result.data
    if output_json:
        console.print_json(data=search.raw)
        return search

    issue = fetch_first(client, search)
    if issue is None:
        return search

    console.print(f"Self: {escape(issue.self_uri)}", highlight=False)
    console.print(f"Key: {escape(issue.key)}", highlight=False)
    console.print(f"Row #: {escape(_display(issue.get_field(ROW_NUMBER_FIELD)))}", highlight=False)
    console.print(f"CFACTS: {escape(_display(issue.get_field(CFACTS_FIELD)))}", highlight=False)
    console.print(f"Fields: {escape(', '.join(issue.raw.keys()))}", highlight=False)

    attachments = issue.attachments
    if attachments:
        names = ", ".join(attachment.filename for attachment in attachments)
        console.print(f"Attachments: {escape(names)}", highlight=False)

    if search.total > 1:
        console.print(f"[dim]{search.total} issues matched, showing the first[/dim]")

    return search


def update_issue(
    client: JiraClient,
    search_field: str,
    search_value: str,
    field_name: str,
    field_value: str,
    dry_run: bool = False,
) -> bool:
    """Find one issue and set a single field on it.

    Returns:
        True if the update was accepted (or validated, in dry-run mode)
    """
    issue = locate_issue(client, search_field, search_value)
    if issue is None:
        console.print("[red]ERROR: see output[/red]")
        return False

    old_value = _display(issue.get_field(field_name))
    console.print(
        f"Updating {escape(issue.key)}: {escape(field_name)} from '{escape(old_value)}' to '{escape(field_value)}'",
        highlight=False,
    )

    update = issue.to_update_request(field_name, field_value)

    if dry_run:
        console.print(Panel.fit("[bold cyan]DRY RUN MODE[/bold cyan]", border_style="cyan"))
        console.print(f"[green]PUT[/green] {escape(update.self_uri)}", highlight=False)
        console.print(escape(json.dumps(update.fields, indent=2)))
        return True

    result = client.update_issue(update)
    if not result.ok:
        report_failure(result)
        console.print("[red]ERROR: see output[/red]")
        return False

    logger.info(f"Updated {issue.key}: {field_name}")
    return True


def _parse_row(row: list[str], line_number: int) -> tuple[str, str, str, str]:
    if len(row) < BULK_COLUMNS:
        raise ValidationError(
            f"Line {line_number}: expected {BULK_COLUMNS} columns "
            "(search_field,search_value,update_field,update_value), "
            f"got {len(row)}"
        )
    search_field, search_value, field_name, field_value = row[:BULK_COLUMNS]
    return search_field, search_value, field_name, field_value


def update_issues_from_file(client: JiraClient, input_file: Path, dry_run: bool = False) -> list[bool]:
    """Run the single-issue update for every row of a CSV file.

    Rows are ``search_field,search_value,update_field,update_value`` with no
    header. The search field is quoted before use so names with spaces work.
    A failing row is reported and processing moves on to the next one.

    Returns:
        One success flag per processed row, in file order
    """
    outcomes: list[bool] = []

    with input_file.open(newline="") as fh:
        for line_number, row in enumerate(csv.reader(fh), start=1):
            if not any(cell.strip() for cell in row):
                continue

            try:
                search_field, search_value, field_name, field_value = _parse_row(row, line_number)
            except ValidationError as err:
                console.print(f"[red]Error:[/red] {escape(str(err))}")
                outcomes.append(False)
                continue

            try:
                ok = update_issue(
                    client,
                    f'"{search_field}"',
                    search_value,
                    field_name,
                    field_value,
                    dry_run=dry_run,
                )
            except APIError as err:
                console.print(f"[red]Error:[/red] line {line_number}: {escape(str(err))}")
                ok = False
            outcomes.append(ok)

    failed = outcomes.count(False)
    logger.info(f"Processed {len(outcomes)} rows from {input_file}, {failed} failed")
    if failed:
        console.print(f"[yellow]{failed} of {len(outcomes)} rows failed[/yellow]")

    return outcomes


def download_attachments(
    client: JiraClient,
    directory: Path,
    search_field: str,
    search_value: str,
) -> list[Path]:
    """Download every attachment of the matching issue into ``directory``.

    Returns:
        Paths of the attachments that downloaded successfully
    """
    issue = locate_issue(client, search_field, search_value)
    if issue is None:
        return []

    attachments = issue.attachments
    if not attachments:
        console.print(f"[yellow]{escape(issue.key)} has no attachments[/yellow]")
        return []

    directory.mkdir(parents=True, exist_ok=True)
    downloaded: list[Path] = []

    for attachment in attachments:
        console.print(f"{escape(attachment.filename)}: {escape(attachment.content_uri)}", highlight=False)

        # Attachment names come from the server; never let them leave the directory
        name = Path(attachment.filename).name
        if name in UNSAFE_NAMES:
            console.print(f"[red]Error:[/red] skipping attachment with unusable name '{escape(attachment.filename)}'")
            continue
        destination = directory / name
        result = client.download_attachment(attachment.content_uri, destination)
        console.print(f"Get resp: {result.status_code}", highlight=False)

        if result.ok:
            downloaded.append(destination)
        else:
            report_failure(result)

    return downloaded
