"""Test fixtures for command-line tests."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

CREDENTIALS = {
    "ATLASSIAN_DOMAIN": "test.atlassian.net",
    "ATLASSIAN_EMAIL": "user@example.com",
    "ATLASSIAN_API_TOKEN": "test_token_value",
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_env(clean_env, isolated_home):
    """Credentials in the environment, no config files anywhere."""
    return dict(CREDENTIALS)


@pytest.fixture
def jira_fetcher_class():
    with patch("atlassian_cli.commands.context.JiraFetcher") as fetcher_class:
        yield fetcher_class


@pytest.fixture
def jira_fetcher(jira_fetcher_class):
    return jira_fetcher_class.return_value


@pytest.fixture
def confluence_fetcher_class():
    with patch("atlassian_cli.commands.context.ConfluenceFetcher") as fetcher_class:
        yield fetcher_class


@pytest.fixture
def confluence_fetcher(confluence_fetcher_class):
    return confluence_fetcher_class.return_value
