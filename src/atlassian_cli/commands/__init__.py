"""Command groups of the atlassian-cli entry point."""

from .config import config_group
from .confluence import confluence as confluence_group
from .jira import jira as jira_group

__all__ = ["config_group", "confluence_group", "jira_group"]
