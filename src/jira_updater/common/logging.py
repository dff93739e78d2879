"""Logging setup for jira-updater.

Log records go to stderr through rich so they never interleave with the
issue report printed on stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from jira_updater.common.errors import ConfigurationError

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: str | int) -> int:
    """Turn a level name such as ``"debug"`` into a logging constant.

    Raises:
        ConfigurationError: If the name is not a standard level
    """
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name not in LEVEL_NAMES:
        raise ConfigurationError(f"Unknown log level '{level}', expected one of {', '.join(LEVEL_NAMES)}")
    return getattr(logging, name)


def setup_logging(
    name: str,
    level: str | int = "INFO",
    log_file: Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the named logger for a CLI run.

    Args:
        name: Logger name, normally the package name
        level: Level name or logging constant
        log_file: Optional file that also receives every record
        console: Whether to log to stderr

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logging("jira_updater", level="DEBUG")
        >>> logger.debug("GET https://jira.example.com/rest/api/2/search?jql=key=JIRA-123")
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    # --verbose may raise the level on a logger that already has handlers
    if logger.handlers:
        return logger

    if console:
        stderr_handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(stderr_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
