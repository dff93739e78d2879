"""Command-line interface for jira-updater.

Which flow runs is decided by the options given, in this order:
attachments directory, input file, update value, search value.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from jira_updater.common.config import AppConfig
from jira_updater.common.errors import APIError, ConfigurationError
from jira_updater.common.logging import setup_logging
from jira_updater.jira import commands
from jira_updater.jira.client import JiraClient

EXAMPLES = """\b
Examples:

\b
  Find JIRA issue by key and display
    jira-updater -s key -k JIRA-123

\b
  Find JIRA issue by custom field and display
    jira-updater -s '"Legacy%20Row%20No"' -k M1-048

\b
  Find JIRA issue where legacy row no. contains 'M1-048' and update the 'CFACTS' field to '1234'
    jira-updater -s '"Legacy%20Row%20No"' -k M1-048 -n customfield_12850 -v 1234

\b
  Update many issues from a CSV file (search_field,search_value,update_field,update_value)
    jira-updater -f updates.csv

\b
  Find JIRA issue by key and retrieve attachments into directory_name
    jira-updater -s key -k JIRA-123 -a directory_name
"""

app = typer.Typer(
    name="jira-updater",
    help="Search, update and download attachments from JIRA issues.",
    rich_markup_mode=None,
)

console = Console(soft_wrap=True)


class Command(str, Enum):
    """Top-level flows, in dispatch priority order."""

    DOWNLOAD_ATTACHMENTS = "download-attachments"
    UPDATE_BULK = "update-bulk"
    UPDATE_ONE = "update-one"
    FIND = "find"


def select_command(
    attachments: Path | None = None,
    input_file: Path | None = None,
    update_value: str | None = None,
    search_value: str | None = None,
) -> Command | None:
    """Pick the single flow to run from the supplied options.

    Returns:
        The selected command, or None when nothing actionable was given
    """
    if attachments is not None:
        return Command.DOWNLOAD_ATTACHMENTS
    if input_file is not None:
        return Command.UPDATE_BULK
    if update_value is not None:
        return Command.UPDATE_ONE
    if search_value is not None:
        return Command.FIND
    return None


def load_config(env_file: Path | None = None) -> AppConfig:
    """Load and validate JIRA configuration, exiting on failure."""
    try:
        config = AppConfig(env_file=env_file)
        config.require_valid("jira")
    except ConfigurationError as err:
        console.print(f"[red]Configuration Error:[/red] {escape(str(err))}")
        raise typer.Exit(1) from err
    return config


def get_client(config: AppConfig) -> JiraClient:
    """Get configured JIRA client."""
    return JiraClient(
        base_url=config.jira.base_url,
        username=config.jira.username,
        password=config.jira.password,
        timeout=config.jira.timeout,
        verify_ssl=config.jira.verify_ssl,
    )


def _require(value: str | None, option: str, command: Command) -> str:
    if value is None:
        raise typer.BadParameter(f"required for {command.value}", param_hint=option)
    return value


@app.command(epilog=EXAMPLES)
def run(
    ctx: typer.Context,
    search_value: str | None = typer.Option(None, "--search_value", "-k", help="Field value to search with"),
    search_field: str = typer.Option("key", "--search_field", "-s", help="Field name to search with"),
    update_field_name: str | None = typer.Option(None, "--update_field_name", "-n", help="Field name to update"),
    update_value: str | None = typer.Option(None, "--value_to_update", "-v", help="Field value to update with"),
    input_file: Path | None = typer.Option(
        None,
        "--read_from_file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Read inputs from a CSV file",
    ),
    attachments: Path | None = typer.Option(
        None,
        "--attachments",
        "-a",
        file_okay=False,
        help="Download attachments into DIRNAME",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show updates without sending them"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Print search results as JSON"),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        exists=True,
        dir_okay=False,
        help="Path to .env configuration file",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output (DEBUG level)"),
):
    """Search, update and download attachments from JIRA issues."""
    command = select_command(attachments, input_file, update_value, search_value)
    if command is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if command is Command.DOWNLOAD_ATTACHMENTS:
        _require(search_value, "--search_value", command)
    elif command is Command.UPDATE_ONE:
        _require(search_value, "--search_value", command)
        _require(update_field_name, "--update_field_name", command)

    config = load_config(env_file)
    logger = setup_logging("jira_updater", level=logging.DEBUG if verbose else config.log_level)
    logger.debug(f"Running {command.value} against {config.jira.base_url}")

    client = get_client(config)

    try:
        if command is Command.DOWNLOAD_ATTACHMENTS:
            commands.download_attachments(client, attachments, search_field, search_value)
        elif command is Command.UPDATE_BULK:
            commands.update_issues_from_file(client, input_file, dry_run=dry_run)
        elif command is Command.UPDATE_ONE:
            commands.update_issue(
                client,
                search_field,
                search_value,
                update_field_name,
                update_value,
                dry_run=dry_run,
            )
        else:
            commands.find_issue(client, search_field, search_value, output_json=output_json)
    except APIError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(1) from err


def main():
    """Entry point for the jira-updater console script."""
    app()


if __name__ == "__main__":
    main()
