"""Allow ``python -m jira_updater``."""

from jira_updater.cli import main

if __name__ == "__main__":
    main()
